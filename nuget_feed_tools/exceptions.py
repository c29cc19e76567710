"""
Custom exceptions for NuGet Feed Tools.
"""


class NuGetFeedToolsError(Exception):
    """Base exception class for all NuGet Feed Tools errors."""
    pass


class ConfigurationError(NuGetFeedToolsError):
    """Raised when configuration is invalid."""
    pass


class FeedQueryError(NuGetFeedToolsError):
    """Raised when the package feed answers a query with an HTTP error."""
    
    def __init__(self, message: str, url: str = None, status_code: int = None):
        self.url = url
        self.status_code = status_code
        
        if url:
            message = f"Feed request to '{url}' failed: {message}"
            if status_code is not None:
                message += f" (HTTP {status_code})"
        
        super().__init__(message)


class FeedParseError(NuGetFeedToolsError):
    """Raised when a feed response cannot be parsed."""
    
    def __init__(self, message: str, url: str = None):
        self.url = url
        
        if url:
            message = f"Could not parse feed response from '{url}': {message}"
        
        super().__init__(message)


class ExportError(NuGetFeedToolsError):
    """Raised when the package list cannot be written to disk."""
    
    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path
        
        if file_path:
            message = f"Error writing '{file_path}': {message}"
        
        super().__init__(message)


class BatchFileError(NuGetFeedToolsError):
    """Raised when the deletion batch file cannot be read."""
    
    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path
        
        if file_path:
            message = f"Error reading batch file '{file_path}': {message}"
        
        super().__init__(message)


class InputClosedError(NuGetFeedToolsError):
    """Raised when input ends before a required value was entered."""
    
    def __init__(self, prompt: str = None):
        self.prompt = prompt
        
        message = "Input ended before a required value was entered"
        if prompt:
            message += f": {prompt}"
        
        super().__init__(message)
