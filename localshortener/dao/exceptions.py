from localshortener.exceptions import LocalShortenerError


class DAOError(LocalShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class StoreReadError(DataStoreError):
    """Exception raised when a read from the data store fails or finds no value."""

    error_code = 'dao:store_read_error'


class StoreWriteError(DataStoreError):
    """Exception raised when a write or delete against the data store fails."""

    error_code = 'dao:store_write_error'
