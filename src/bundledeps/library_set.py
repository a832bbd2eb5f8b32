# @mindmaze_header@
"""
Collection of the external shared libraries used by a bundle
"""

import os
from typing import Dict, Iterator


class LibrarySet:
    """
    Set of library references deduplicated by basename: /a/libfoo.so.1 and
    /b/libfoo.so.1 designate the same library. The first reference added is
    the one kept. Entries are never removed and iteration follows the order
    of insertion.
    """

    def __init__(self):
        self._libs: Dict[str, str] = {}

    @staticmethod
    def key(library: str) -> str:
        """identifier of a library in the set"""
        return os.path.basename(library)

    def add(self, library: str) -> bool:
        """
        Add library to the set

        Return:
            True if the library was not yet in the set
        """
        key = self.key(library)
        if key in self._libs:
            return False

        self._libs[key] = library
        return True

    def __contains__(self, library: str) -> bool:
        return self.key(library) in self._libs

    def __iter__(self) -> Iterator[str]:
        return iter(self._libs.values())

    def __len__(self) -> int:
        return len(self._libs)

    def __repr__(self):
        return 'LibrarySet({})'.format(list(self._libs.values()))
