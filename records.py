"""Entity records for users, folders and files."""

from dataclasses import dataclass, field
from datetime import datetime

from trie import Trie
from validator import validate_name


@dataclass(frozen=True)
class Entry:
    """Read-only view of a record, without its children.

    This is what the storage hands back to callers.
    """
    kind: str
    name: str
    description: str
    created_at: datetime

    @property
    def key(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class File:
    name: str
    description: str
    created_at: datetime

    @classmethod
    def create(cls, name: str, description: str, now: datetime) -> "File":
        validate_name(name, "file name")
        return cls(name, description, now)

    @property
    def key(self) -> str:
        return self.name.lower()

    def entry(self) -> Entry:
        return Entry("file", self.name, self.description, self.created_at)


@dataclass(frozen=True)
class Folder:
    name: str
    description: str
    created_at: datetime
    files: Trie[File] = field(default_factory=Trie, repr=False, compare=False)

    @classmethod
    def create(cls, name: str, description: str, now: datetime) -> "Folder":
        validate_name(name, "folder name")
        return cls(name, description, now)

    @property
    def key(self) -> str:
        return self.name.lower()

    def entry(self) -> Entry:
        return Entry("folder", self.name, self.description, self.created_at)


@dataclass(frozen=True)
class User:
    name: str
    created_at: datetime
    folders: Trie[Folder] = field(default_factory=Trie, repr=False, compare=False)

    @classmethod
    def create(cls, name: str, now: datetime) -> "User":
        validate_name(name, "username")
        return cls(name, now)

    @property
    def key(self) -> str:
        return self.name.lower()

    def entry(self) -> Entry:
        return Entry("user", self.name, "", self.created_at)
