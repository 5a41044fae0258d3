class TokenAuditError(Exception):
    pass


class InvalidContractError(TokenAuditError):
    """Primary security payload missing, malformed or unreachable."""


class InvalidMarketDataError(TokenAuditError):
    """Market provider explicitly reported an error for the contract."""


class ProviderError(TokenAuditError):
    """Transport or decoding fault talking to an external provider."""


class SourceUnavailable(TokenAuditError):
    """An optional source failed; the resolver recovers with None."""

    def __init__(self, source: str, cause: BaseException | None = None) -> None:
        self.source = source
        self.cause = cause
        detail = f": {type(cause).__name__}: {cause}" if cause is not None else ""
        super().__init__(f"{source} unavailable{detail}")


class MalformedField(TokenAuditError):
    """A single raw property could not be parsed; the evaluator falls back to Unknown."""

    def __init__(self, field: str, raw: object) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"Cannot parse {field}={raw!r}")
