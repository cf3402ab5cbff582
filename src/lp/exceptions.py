class LpError(Exception):
    pass


class BackendError(LpError):
    """Indexing backend could not serve the pair list."""


class BackendHttpError(BackendError):
    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class BackendPayloadError(BackendError):
    """Backend answered 200 but the body was not a valid pair list."""


class LedgerError(LpError):
    """Raised by ledger client implementations on RPC/contract failures."""
