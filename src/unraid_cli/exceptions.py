from typing import Optional, Dict, Any, List


class UnraidError(Exception):
    def __init__(
        self,
        message: str,
        code: str = "UNRAID_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(UnraidError):
    def __init__(self, message: str = "No server configured", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


class NotFoundError(UnraidError):
    def __init__(self, resource_type: str, name: str, message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} '{name}' not found",
            "NOT_FOUND",
            {"resource_type": resource_type, "name": name}
        )


class ConfigFileError(UnraidError):
    def __init__(self, message: str, path: str):
        super().__init__(message, "CONFIG_IO_ERROR", {"path": path})


class ConfigParseError(UnraidError):
    def __init__(self, message: str, path: str):
        super().__init__(message, "CONFIG_PARSE_ERROR", {"path": path})


class APIError(UnraidError):
    pass


class TransportError(APIError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, "TRANSPORT_ERROR", {"status_code": status_code})
        self.status_code = status_code


class DecodeError(APIError):
    def __init__(self, message: str = "Failed to parse GraphQL response"):
        super().__init__(message, "DECODE_ERROR")


class GraphQLError(APIError):
    def __init__(self, messages: List[str]):
        super().__init__(
            f"GraphQL errors: {', '.join(messages)}",
            "GRAPHQL_ERROR",
            {"messages": messages}
        )
        self.messages = messages


class NoDataError(APIError):
    def __init__(self):
        super().__init__("No data returned from GraphQL query", "NO_DATA")
