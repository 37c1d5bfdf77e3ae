"""Domain errors for the citeproc crosswalk."""


class CrosswalkError(Exception):
    """
    Raised when an object cannot be disseminated by the crosswalk.

    Attributes:
        reason: Why the object was rejected
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot disseminate object: {reason}")


class MalformedFieldMapping(Exception):
    """
    Raised (and logged, non-blocking) when a field mapping entry cannot be parsed.

    Attributes:
        key: Configuration key (e.g., 'field.title')
        value: Offending configuration value
    """

    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"Field mapping '{key}' has malformed value '{value}'. "
            f"Expected 'schema.element[.qualifier][,alternative...][(converter)]'; entry skipped."
        )


class UnknownConverter(Exception):
    """
    Raised (and logged, non-blocking) when a converter implementation is not recognised.

    Attributes:
        name: Converter name from configuration
        implementation: Implementation identifier that could not be resolved
    """

    def __init__(self, name: str, implementation: str) -> None:
        self.name = name
        self.implementation = implementation
        super().__init__(
            f"Can't find converter implementation '{implementation}' for converter '{name}'"
        )


class InvalidTargetField(Exception):
    """
    Raised when a metadata field identifier is not 'schema.element[.qualifier]'.

    Attributes:
        field_id: Offending field identifier
    """

    def __init__(self, field_id: str) -> None:
        self.field_id = field_id
        super().__init__(
            f"Invalid metadata field '{field_id}': expected 'schema.element[.qualifier]'"
        )


class CitationGenerationError(Exception):
    """
    Raised when the external renderer cannot produce a citation.

    Attributes:
        message: Error message
        reason: Detailed reason for failure (optional)
    """

    def __init__(self, message: str, reason: str | None = None) -> None:
        self.message = message
        self.reason = reason
        super().__init__(f"{message}: {reason}" if reason else message)
