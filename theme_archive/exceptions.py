"""Custom exceptions for the theme archive site generator."""

class ThemeArchiveError(Exception):
    """Base class for every error the generator reports to the user.

    The CLI catches this type, logs ``str(exc)`` and exits with status 1; the
    preview server puts ``code`` into its degraded health response. Codes:

        INPUT_MISSING      catalog file absent
        CATALOG_MALFORMED  bad JSON, wrong shape, or an id unusable as a file name
        FETCH_FAILED       nothing built yet where the preview server looks
        CONFIG_INVALID     unreadable YAML config or a bad setting value

    Attributes:
        code (str): One of the codes above (``ARCHIVE_ERR`` for the base class)
        message (str): Human-readable description
        details (dict): Extra context such as the JSON error position
    """
    
    def __init__(self, message: str, code: str = "ARCHIVE_ERR", details: dict | None = None):
        """Initialize the base theme archive error.
        
        Args:
            message: Human-readable error description
            code: Error code for identification and handling
            details: Additional context about the error
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
    
    def __str__(self) -> str:
        """Format the error message with code and details."""
        error_msg = f"[{self.code}] {self.message}"
        if self.details:
            error_msg += f"\nDetails: {self.details}"
        return error_msg

class MissingInputFileError(ThemeArchiveError):
    """Raised when a required input file (the theme catalog) does not exist."""
    
    def __init__(self, path: str, details: dict | None = None):
        """Initialize missing input file error.
        
        Args:
            path: Path of the file that was expected
            details: Additional context about the missing file
        """
        self.path = path
        message = f"Required input file not found: '{path}'"
        super().__init__(message, code="INPUT_MISSING", details=details)

class MalformedCatalogError(ThemeArchiveError):
    """Raised when catalog content is not valid JSON or has the wrong shape.
    
    The theme catalog must be a JSON array of objects; the model image table
    must be a JSON object mapping model names to image paths.
    """
    
    def __init__(self, path: str, reason: str, details: dict | None = None):
        """Initialize malformed catalog error.
        
        Args:
            path: Path of the offending file
            reason: Short description of what is wrong with it
            details: Additional context about the parse failure
        """
        self.path = path
        self.reason = reason
        message = f"Malformed catalog '{path}': {reason}"
        super().__init__(message, code="CATALOG_MALFORMED", details=details)

class FetchFailure(ThemeArchiveError):
    """Raised when generated site content cannot be served or fetched."""
    
    def __init__(self, target: str, details: dict | None = None):
        message = f"Failed to fetch '{target}'"
        super().__init__(message, code="FETCH_FAILED", details=details)

class ConfigError(ThemeArchiveError):
    """Raised when a configuration value or config file is invalid."""
    
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, code="CONFIG_INVALID", details=details)
