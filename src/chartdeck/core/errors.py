"""Error taxonomy for the release orchestrator."""

from __future__ import annotations


class ChartdeckError(RuntimeError):
    """Base class for every error raised by chartdeck."""


class NotFound(ChartdeckError):
    """Raised when a lookup has no match."""

    @classmethod
    def repository_name(cls, name: str) -> NotFound:
        return cls(f"Repository with name '{name}' not found.")

    @classmethod
    def repository_url(cls, url: str) -> NotFound:
        return cls(f"Repository with URL '{url}' not found.")

    @classmethod
    def chart_versions(cls, repo_name: str, chart_name: str) -> NotFound:
        return cls(f"Chart '{chart_name}' has no versions in repository '{repo_name}'.")


class UpstreamError(ChartdeckError):
    """Raised when a backend call fails (transport error or non-2xx status)."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, url: str, detail: str = "") -> UpstreamError:
        """Return an error for a non-2xx response, preferring the backend's own message."""
        message = detail or f"HTTP {status_code} from {url}"
        if status_code == 404:
            return UpstreamNotFound(message, status_code=status_code, url=url)
        return cls(message, status_code=status_code, url=url)

    @classmethod
    def transport(cls, url: str, exc: Exception) -> UpstreamError:
        return cls(f"Request to {url} failed: {exc}", url=url)

    @classmethod
    def malformed(cls, url: str, what: str) -> UpstreamError:
        return cls(f"Unexpected response from {url}: {what}", url=url)


class UpstreamNotFound(UpstreamError, NotFound):
    """The backend answered 404."""


class ValidationError(ChartdeckError):
    """Raised for malformed mutation requests."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)

    @classmethod
    def invalid_name(cls, field: str, value: str) -> ValidationError:
        return cls(
            f"Invalid {field} '{value}': must consist of lowercase alphanumerics or '-', "
            "start and end with an alphanumeric, and be at most 253 characters",
            field=field,
        )

    @classmethod
    def missing(cls, field: str) -> ValidationError:
        return cls(f"{field} is required", field=field)
