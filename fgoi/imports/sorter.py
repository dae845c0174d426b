"""
Bucketed import accumulator for a single file.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .classifier import CORE, THIRD_PARTY, BucketKey, BucketKind, ImportClassifier, PrefixClassifier
from .model import Import


class ImportSorter:
    """
    Owns every bucket of one file-processing session.

    Buckets are iterated as core, third-party, then custom buckets in the
    order their prefixes were declared. Empty buckets are included; the
    serializer decides what to skip.
    """

    def __init__(self, classifier: Union[ImportClassifier, Iterable[str], None] = None):
        if classifier is None:
            classifier = PrefixClassifier()
        elif not isinstance(classifier, ImportClassifier):
            classifier = PrefixClassifier(classifier)
        self.classifier: ImportClassifier = classifier
        self.core: List[Import] = []
        self.third_party: List[Import] = []
        self.custom: Dict[str, List[Import]] = {p: [] for p in classifier.prefixes}

    def bucket(self, key: BucketKey) -> List[Import]:
        if key.kind is BucketKind.CORE:
            return self.core
        if key.kind is BucketKind.THIRD_PARTY:
            return self.third_party
        return self.custom[key.prefix]

    def insert(self, imp: Union[Import, Tuple[Optional[str], str]]) -> BucketKey:
        """Append an import to its bucket and return the bucket key."""
        if not isinstance(imp, Import):
            name, url = imp
            imp = Import.of(name, url)
        key = self.classifier.classify(imp.url)
        self.bucket(key).append(imp)
        return key

    def sort(self) -> None:
        # list.sort is stable: equal paths keep encounter order
        for bucket in self:
            bucket.sort(key=lambda i: i.url)

    def items(self) -> Iterator[Tuple[BucketKey, List[Import]]]:
        yield CORE, self.core
        yield THIRD_PARTY, self.third_party
        for prefix, bucket in self.custom.items():
            yield BucketKey.custom(prefix), bucket

    def iter(self) -> Iterator[List[Import]]:
        for _, bucket in self.items():
            yield bucket

    def __iter__(self) -> Iterator[List[Import]]:
        return self.iter()

    def imports_count(self) -> int:
        return sum(len(b) for b in self)

    def __len__(self) -> int:
        return self.imports_count()

    def get_single_count(self) -> Optional[Import]:
        """The lone import when the whole file has exactly one, else None."""
        if self.imports_count() != 1:
            return None
        for bucket in self:
            if bucket:
                return bucket[0]
        return None


__all__ = ["ImportSorter"]
