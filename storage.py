"""Thread-safe in-memory storage for the user/folder/file namespace."""

import logging
from datetime import datetime
from typing import Callable

from errors import AlreadyExistsError, NotFoundError
from records import Entry, File, Folder, User
from rwlock import ReadWriteLock
from trie import Trie

logger = logging.getLogger(__name__)

SORT_NAME = "name"
SORT_CREATED = "created"
ASC = "asc"
DESC = "desc"

SORT_KEYS = {
    SORT_NAME: lambda record: record.key,
    SORT_CREATED: lambda record: record.created_at,
}


def _sorted_entries(records, sort_field: str, sort_order: str) -> list[Entry]:
    """Sort records by sort_field/sort_order and return their entries.

    Records are first put in key order so that ties under a stable sort
    come out the same way every time.
    """
    if sort_field not in SORT_KEYS:
        raise ValueError(f"Unknown sort field: {sort_field!r}")
    if sort_order not in (ASC, DESC):
        raise ValueError(f"Unknown sort order: {sort_order!r}")
    ordered = sorted(records, key=lambda record: record.key)
    ordered.sort(key=SORT_KEYS[sort_field], reverse=sort_order == DESC)
    return [record.entry() for record in ordered]


class Storage:
    """Users, their folders and the folders' files, all in memory.

    Names are matched case-insensitively; records keep the spelling they
    were created with. Every public method holds one reader/writer lock for
    its whole duration: mutations take the write side, lookups and listings
    the read side. Methods starting with an underscore expect the caller to
    hold the lock.

    Example:
        s = Storage()
        s.add_user("Alice")
        s.create_folder("alice", "docs", "work notes")
        s.list_folders("ALICE", "created", "desc")
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._users: Trie[User] = Trie()
        self._lock = ReadWriteLock()
        self._clock = clock

    def _user(self, username: str) -> User:
        user = self._users.search(username)
        if user is None:
            raise NotFoundError(f"user '{username}' not found")
        return user

    def _folder(self, username: str, foldername: str) -> Folder:
        folder = self._user(username).folders.search(foldername)
        if folder is None:
            raise NotFoundError(f"folder '{foldername}' not found for user '{username}'")
        return folder

    # Users

    def add_user(self, username: str) -> Entry:
        with self._lock.write_locked():
            user = User.create(username, self._clock())
            if user.key in self._users:
                raise AlreadyExistsError(f"user '{username}' already exists")
            self._users.insert(user.key, user)
        logger.debug("Added user %s", username)
        return user.entry()

    def delete_user(self, username: str) -> None:
        """Remove a user together with all of its folders and files."""
        with self._lock.write_locked():
            if not self._users.delete(username):
                raise NotFoundError(f"user '{username}' not found")
        logger.debug("Deleted user %s", username)

    def get_user(self, username: str) -> Entry:
        with self._lock.read_locked():
            return self._user(username).entry()

    def list_users(self, prefix: str = "") -> list[str]:
        """Return display names of users whose name starts with prefix."""
        with self._lock.read_locked():
            matches = self._users.prefix_search(prefix)
        return [matches[key].name for key in sorted(matches)]

    # Folders

    def create_folder(self, username: str, foldername: str, description: str = "") -> Entry:
        with self._lock.write_locked():
            user = self._user(username)
            folder = Folder.create(foldername, description, self._clock())
            if folder.key in user.folders:
                raise AlreadyExistsError(
                    f"folder '{foldername}' already exists for user '{username}'"
                )
            user.folders.insert(folder.key, folder)
        logger.debug("Created folder %s/%s", username, foldername)
        return folder.entry()

    def delete_folder(self, username: str, foldername: str) -> None:
        """Remove a folder together with all of its files."""
        with self._lock.write_locked():
            user = self._user(username)
            if not user.folders.delete(foldername):
                raise NotFoundError(f"folder '{foldername}' not found for user '{username}'")
        logger.debug("Deleted folder %s/%s", username, foldername)

    def get_folder(self, username: str, foldername: str) -> Entry:
        with self._lock.read_locked():
            return self._folder(username, foldername).entry()

    def list_folders(self, username: str, sort_field: str = SORT_NAME,
                     sort_order: str = ASC) -> list[Entry]:
        """List a user's folders sorted by name or creation time."""
        with self._lock.read_locked():
            folders = self._user(username).folders.prefix_search("").values()
            return _sorted_entries(folders, sort_field, sort_order)

    # Files

    def create_file(self, username: str, foldername: str, filename: str,
                    description: str = "") -> Entry:
        with self._lock.write_locked():
            folder = self._folder(username, foldername)
            file = File.create(filename, description, self._clock())
            if file.key in folder.files:
                raise AlreadyExistsError(
                    f"file '{filename}' already exists in folder '{foldername}'"
                )
            folder.files.insert(file.key, file)
        logger.debug("Created file %s/%s/%s", username, foldername, filename)
        return file.entry()

    def delete_file(self, username: str, foldername: str, filename: str) -> None:
        with self._lock.write_locked():
            folder = self._folder(username, foldername)
            if not folder.files.delete(filename):
                raise NotFoundError(f"file '{filename}' not found in folder '{foldername}'")
        logger.debug("Deleted file %s/%s/%s", username, foldername, filename)

    def get_file(self, username: str, foldername: str, filename: str) -> Entry:
        with self._lock.read_locked():
            file = self._folder(username, foldername).files.search(filename)
            if file is None:
                raise NotFoundError(f"file '{filename}' not found in folder '{foldername}'")
            return file.entry()

    def list_files(self, username: str, foldername: str, sort_field: str = SORT_NAME,
                   sort_order: str = ASC) -> list[Entry]:
        """List a folder's files sorted by name or creation time."""
        with self._lock.read_locked():
            files = self._folder(username, foldername).files.prefix_search("").values()
            return _sorted_entries(files, sort_field, sort_order)
