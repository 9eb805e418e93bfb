"""Case-insensitive prefix index (trie) mapping string keys to values."""

from typing import Generic, TypeVar

from rwlock import ReadWriteLock

V = TypeVar("V")


class _Node:
    __slots__ = ("children", "terminal", "value")

    def __init__(self):
        self.children: dict[str, "_Node"] = {}
        self.terminal = False
        self.value = None


def _normalize(key: str) -> str:
    return key.lower()


class Trie(Generic[V]):
    """Character trie with exact lookup, pruning delete and prefix enumeration.

    Keys are lower-cased before every traversal, so "Docs" and "docs" name
    the same entry. Keys returned by prefix_search() are the lower-cased
    form. Each instance guards itself with a reader/writer lock and can be
    shared between threads on its own.

    Example:
        t = Trie()
        t.insert("Alice", 1)
        t.search("ALICE")          # 1
        t.prefix_search("al")      # {"alice": 1}
    """

    def __init__(self):
        self._root = _Node()
        self._size = 0
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return self._size

    def __contains__(self, key: str) -> bool:
        with self._lock.read_locked():
            node = self._find(_normalize(key))
            return node is not None and node.terminal

    def _find(self, key: str) -> _Node | None:
        """Walk the path for an already normalized key. Caller holds the lock."""
        node = self._root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def insert(self, key: str, value: V) -> None:
        """Store value under key, replacing any value already there."""
        with self._lock.write_locked():
            node = self._root
            for ch in _normalize(key):
                child = node.children.get(ch)
                if child is None:
                    child = node.children[ch] = _Node()
                node = child
            if not node.terminal:
                self._size += 1
            node.terminal = True
            node.value = value

    def search(self, key: str, default: V | None = None) -> V | None:
        """Return the value stored under key, or default if there is none."""
        with self._lock.read_locked():
            node = self._find(_normalize(key))
            if node is None or not node.terminal:
                return default
            return node.value

    def delete(self, key: str) -> bool:
        """Remove key. Returns False if it was not present."""
        with self._lock.write_locked():
            removed, _ = self._delete(self._root, _normalize(key), 0)
            if removed:
                self._size -= 1
            return removed

    def _delete(self, node: _Node, key: str, depth: int) -> tuple[bool, bool]:
        """Returns (removed, prunable): prunable means node is now a dead leaf."""
        if depth == len(key):
            if not node.terminal:
                return False, False
            node.terminal = False
            node.value = None
            return True, not node.children

        ch = key[depth]
        child = node.children.get(ch)
        if child is None:
            return False, False
        removed, prune_child = self._delete(child, key, depth + 1)
        if prune_child:
            del node.children[ch]
        return removed, removed and not node.terminal and not node.children

    def prefix_search(self, prefix: str = "") -> dict[str, V]:
        """Return every entry whose key starts with prefix. Empty prefix matches all."""
        prefix = _normalize(prefix)
        results: dict[str, V] = {}
        with self._lock.read_locked():
            node = self._find(prefix)
            if node is not None:
                self._collect(node, prefix, results)
        return results

    def _collect(self, node: _Node, key: str, results: dict):
        """Add all terminal nodes under node to results."""
        if node.terminal:
            results[key] = node.value
        for ch, child in node.children.items():
            self._collect(child, key + ch, results)
