"""Abstract base class for ShortLink data access objects (DAOs).

This class establishes a consistent contract for all ShortLink DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Keep links indexed by code and by owner, with both indexes always in agreement.
    - Provide snapshot reads that concurrent mutation never invalidates.
    - Enforce a consistent API for use by the lifecycle service.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshorter.dao.memory import ShortLinkMemoryDAO
        >>> dao = ShortLinkMemoryDAO()
        >>> dao.save(link)
        <ShortLinkMemoryDAO>
        >>> dao.find_by_code(link.code) == link
        True
        >>> dao.delete(link.code)
        True
        >>> dao.delete(link.code)
        False
"""

from abc import ABC, abstractmethod

from linkshorter.models import ShortLinkModel
from linkshorter.types import OwnerId


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        save(link: ShortLinkModel, **kwargs) -> ShortLinkBaseDAO:
            Insert or replace a link under its code and index it under its owner.
            Raises InvalidInputError if link is None.

        find_by_code(code: str, **kwargs) -> ShortLinkModel | None:
            Point lookup by code. Returns None if not found.

        find_by_owner(owner_id: OwnerId, **kwargs) -> list[ShortLinkModel]:
            Snapshot of every link indexed under an owner (order not guaranteed).

        delete(code: str, expected: ShortLinkModel | None = None, **kwargs) -> bool:
            Remove a link from both indexes. Returns whether a link was removed.

        replace(link: ShortLinkModel, expected: ShortLinkModel, **kwargs) -> bool:
            Store `link` only while `expected` is still the stored instance.

        exists(code: str, **kwargs) -> bool
        count(**kwargs) -> int
        find_all(**kwargs) -> list[ShortLinkModel]
        clear(**kwargs) -> None

    Subclassing:
        Datastore-specific implementations must extend this class and implement
        all abstract methods. Every method must be safe under concurrent callers.
    """

    @abstractmethod
    def save(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkBaseDAO':
        """Insert or replace a link under its code.

        Replacing a code owned by someone else moves the code between the two
        owners' indexes in the same critical section.

        Args:
            link (ShortLinkModel):
                The link to store.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            InvalidInputError:
                If link is None.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_code(self, code: str, **kwargs) -> ShortLinkModel | None:
        """Retrieve a link by its code.

        Returns:
            ShortLinkModel | None: The link if found, otherwise None.
        """
        pass

    @abstractmethod
    def find_by_owner(self, owner_id: OwnerId, **kwargs) -> list[ShortLinkModel]:
        """Retrieve every link currently indexed under an owner.

        Returns:
            list[ShortLinkModel]: Snapshot taken at call time, order not guaranteed.
        """
        pass

    @abstractmethod
    def delete(self, code: str, expected: ShortLinkModel | None = None, **kwargs) -> bool:
        """Remove a link from both indexes.

        Args:
            code (str):
                Code of the link to remove.

            expected (ShortLinkModel | None):
                If given, only remove the entry when it is still this exact instance.

        Returns:
            bool: True if a link was removed, False otherwise.
        """
        pass

    @abstractmethod
    def replace(self, link: ShortLinkModel, expected: ShortLinkModel, **kwargs) -> bool:
        """Swap `expected` for `link` under their shared code.

        Nothing is written if the code is no longer held by `expected` (deleted,
        or replaced by another instance since it was read).

        Args:
            link (ShortLinkModel):
                The replacement.

            expected (ShortLinkModel):
                The instance that must still be stored under `link.code`.

        Returns:
            bool: True if `link` was stored, False otherwise.

        Raises:
            InvalidInputError:
                If the two links do not share a code.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def exists(self, code: str, **kwargs) -> bool:
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        pass

    @abstractmethod
    def find_all(self, **kwargs) -> list[ShortLinkModel]:
        pass

    @abstractmethod
    def clear(self, **kwargs) -> None:
        """Drop every link (test/reset use only)."""
        pass
