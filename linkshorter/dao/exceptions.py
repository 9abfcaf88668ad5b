"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when the data store cannot complete an operation (e.g., a lock
        could not be acquired within the bounded wait).

Example:
    >>> from linkshorter.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Timed out after 5.0s waiting for store stripe 3.")
    Traceback (most recent call last):
        ...
    linkshorter.dao.exceptions.DataStoreError: Timed out after 5.0s waiting for store stripe 3.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. lock acquisition timeouts.
    """

    pass
