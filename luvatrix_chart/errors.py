from __future__ import annotations


class ChartError(Exception):
    pass


class ChartDocumentError(ChartError, ValueError):
    """Raised when a persisted chart document is malformed or incomplete."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    def _joined(self, prefix: str) -> str:
        if not self.path:
            return prefix
        return f"{prefix}{self.path}" if self.path.startswith("[") else f"{prefix}.{self.path}"

    def under(self, prefix: str) -> "ChartDocumentError":
        """Same error with its path nested below ``prefix``."""
        return ChartDocumentError(self.message, path=self._joined(prefix))


class TypeNotRegisteredError(ChartDocumentError):
    def __init__(self, kind: str, type_id: str, *, path: str = "") -> None:
        self.kind = kind
        self.type_id = type_id
        super().__init__(f"{kind} type `{type_id}` is not registered", path=path)

    def under(self, prefix: str) -> "TypeNotRegisteredError":
        return TypeNotRegisteredError(self.kind, self.type_id, path=self._joined(prefix))


class ChartSettingsError(ChartError, ValueError):
    pass
