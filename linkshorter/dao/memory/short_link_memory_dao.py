"""Data Access Object (DAO) implementation keeping shortened links in process memory

This module provides a thread-safe, in-memory implementation of ShortLinkBaseDAO.
State lives only as long as the process.

Responsibilities:
    - Index links by code (unique) and by owner (set of codes);
    - Keep both indexes in agreement for every concurrent reader;
    - Scope lock contention to the stripes an operation touches (no global lock).

Classes:
    ShortLinkMemoryDAO:
        Lock-striped, dual-indexed store of ShortLinkModel instances.

Example:
    >>> from linkshorter.dao.memory import ShortLinkMemoryDAO
    >>> dao = ShortLinkMemoryDAO(stripes=32)
    >>> dao.save(link)
    <ShortLinkMemoryDAO>
    >>> [l.code for l in dao.find_by_owner(link.owner_id)]
    ['aB3xY9']
    >>> dao.delete('aB3xY9')
    True
"""

import logging

from beartype import beartype

from linkshorter.types import OwnerId
from linkshorter.models import ShortLinkModel
from linkshorter.dao.base import ShortLinkBaseDAO
from linkshorter.dao.memory.helpers import Stripe, stripe_index, locked_stripes
from linkshorter.exceptions import InvalidInputError
from linkshorter.constants import STORE_STRIPES, LOCK_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    """In-memory Data Access Object (DAO) for shortened links

    Both indexes are split across `stripes` lock stripes: a code's entry lives
    on the stripe its code hashes to, an owner's code set lives on the stripe
    the owner id hashes to. A write holds the code's stripe and every owner
    stripe it touches, so a reader holding either side always sees a
    consistent pair.

    Attributes:
        stripes (int):
            Number of lock stripes.
        lock_timeout (float):
            Bounded wait (seconds) for any single stripe lock.

    Methods:
        save(link: ShortLinkModel, **kwargs) -> ShortLinkMemoryDAO
        find_by_code(code: str, **kwargs) -> ShortLinkModel | None
        find_by_owner(owner_id: OwnerId, **kwargs) -> list[ShortLinkModel]
        delete(code: str, expected: ShortLinkModel | None = None, **kwargs) -> bool
        replace(link: ShortLinkModel, expected: ShortLinkModel, **kwargs) -> bool
        exists(code: str, **kwargs) -> bool
        count(**kwargs) -> int
        find_all(**kwargs) -> list[ShortLinkModel]
        clear(**kwargs) -> None
    """

    def __init__(self, stripes: int = STORE_STRIPES, lock_timeout: float = LOCK_TIMEOUT_SECONDS):
        if isinstance(stripes, bool) or not isinstance(stripes, int) or stripes <= 0:
            raise InvalidInputError(f'Number of stripes must be a positive integer (given value: {stripes!r}).')
        self.stripes = stripes
        self.lock_timeout = lock_timeout
        self._stripes = [Stripe() for _ in range(stripes)]

    def __repr__(self) -> str:
        return '<ShortLinkMemoryDAO>'

    def save(self, link: ShortLinkModel, **kwargs) -> 'ShortLinkMemoryDAO':
        """Insert or replace a link under its code

        If the code is currently held by a link of another owner, the code is
        moved from that owner's index to the new owner's index in the same
        critical section.

        Args:
            link (ShortLinkModel):
                The link to store.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkMemoryDAO: self (for method chaining)

        Raises:
            InvalidInputError:
                If link is None.
            DataStoreError:
                If a stripe lock cannot be acquired in time.
        """
        if link is None:
            raise InvalidInputError('Short link cannot be None.')
        if not isinstance(link, ShortLinkModel):
            raise TypeError(f'Expected ShortLinkModel (given type: {type(link)}).')

        code_index = self._index(link.code)
        owner_index = self._index(link.owner_id)
        while True:
            # The owner stripes to lock depend on who holds the code right now.
            # Peek, lock, then confirm nothing changed in between (else retry).
            previous = self.find_by_code(link.code)
            indexes = {code_index, owner_index}
            if previous is not None:
                indexes.add(self._index(previous.owner_id))

            with locked_stripes(self._stripes, indexes, self.lock_timeout):
                links = self._stripes[code_index].links
                current = links.get(link.code)
                if current is not previous:
                    continue

                if current is not None and current.owner_id != link.owner_id:
                    logger.warning(
                        'Short code collision: replacing a link owned by another owner.',
                        extra={'shortcode': link.code, 'previousOwnerId': current.owner_id, 'ownerId': link.owner_id},
                    )
                    self._unindex_owner(current)

                links[link.code] = link
                self._stripes[owner_index].owners.setdefault(link.owner_id, set()).add(link.code)
                return self

    @beartype
    def find_by_code(self, code: str, **kwargs) -> ShortLinkModel | None:
        index = self._index(code)
        with locked_stripes(self._stripes, (index,), self.lock_timeout):
            return self._stripes[index].links.get(code)

    @beartype
    def find_by_owner(self, owner_id: OwnerId, **kwargs) -> list[ShortLinkModel]:
        """Snapshot every link indexed under an owner

        Only the owner's stripe is locked: every write that adds or removes one
        of this owner's codes holds it, so each indexed code has its entry in
        place for as long as the lock is held.
        """
        owner_index = self._index(owner_id)
        with locked_stripes(self._stripes, (owner_index,), self.lock_timeout):
            codes = list(self._stripes[owner_index].owners.get(owner_id, ()))
            return [self._stripes[self._index(code)].links[code] for code in codes]

    @beartype
    def delete(self, code: str, expected: ShortLinkModel | None = None, **kwargs) -> bool:
        """Remove a link from both indexes

        Args:
            code (str):
                Code of the link to remove.
            expected (ShortLinkModel | None):
                If given, only remove the entry when it is still this exact
                instance (a newer link stored under the same code is left alone).

        Returns:
            bool: True if a link was removed, False otherwise.

        Example:
            >>> dao.delete('aB3xY9')
            True
            >>> dao.delete('aB3xY9')
            False
        """
        code_index = self._index(code)
        while True:
            previous = self.find_by_code(code)
            if previous is None or (expected is not None and previous is not expected):
                return False

            indexes = {code_index, self._index(previous.owner_id)}
            with locked_stripes(self._stripes, indexes, self.lock_timeout):
                links = self._stripes[code_index].links
                if links.get(code) is not previous:
                    continue

                del links[code]
                self._unindex_owner(previous)
                return True

    @beartype
    def replace(self, link: ShortLinkModel, expected: ShortLinkModel, **kwargs) -> bool:
        """Store `link` in place of `expected`, only if `expected` is still stored

        The stripes to lock follow from `expected`: if it is still the stored
        instance, its owner is the one indexed, so no retry is needed.

        Example:
            >>> dao.delete('aB3xY9')
            True
            >>> dao.replace(replacement, expected=link)
            False
        """
        if link.code != expected.code:
            raise InvalidInputError(f'Replacement code {link.code!r} does not match stored code {expected.code!r}.')

        code_index = self._index(link.code)
        owner_index = self._index(link.owner_id)
        indexes = {code_index, owner_index, self._index(expected.owner_id)}
        with locked_stripes(self._stripes, indexes, self.lock_timeout):
            links = self._stripes[code_index].links
            if links.get(link.code) is not expected:
                return False

            if expected.owner_id != link.owner_id:
                self._unindex_owner(expected)
            links[link.code] = link
            self._stripes[owner_index].owners.setdefault(link.owner_id, set()).add(link.code)
            return True

    @beartype
    def exists(self, code: str, **kwargs) -> bool:
        return self.find_by_code(code) is not None

    def count(self, **kwargs) -> int:
        total = 0
        for index, stripe in enumerate(self._stripes):
            with locked_stripes(self._stripes, (index,), self.lock_timeout):
                total += len(stripe.links)
        return total

    def find_all(self, **kwargs) -> list[ShortLinkModel]:
        """Snapshot every stored link, one stripe at a time."""
        result = []
        for index, stripe in enumerate(self._stripes):
            with locked_stripes(self._stripes, (index,), self.lock_timeout):
                result.extend(stripe.links.values())
        return result

    def clear(self, **kwargs) -> None:
        with locked_stripes(self._stripes, range(self.stripes), self.lock_timeout):
            for stripe in self._stripes:
                stripe.links.clear()
                stripe.owners.clear()

    def _index(self, key: object) -> int:
        return stripe_index(key, self.stripes)

    def _unindex_owner(self, link: ShortLinkModel) -> None:
        # Caller must hold the stripe of `link.owner_id`
        owners = self._stripes[self._index(link.owner_id)].owners
        codes = owners.get(link.owner_id)
        if codes is None:
            return
        codes.discard(link.code)
        if not codes:
            del owners[link.owner_id]
