class SubtitleError(Exception):
    """
    Base class for errors raised while reading or writing subtitles
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class SubtitleParseError(SubtitleError):
    """
    Raised when subtitle content cannot be parsed at all
    """
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

    def __str__(self) -> str:
        if self.error and self.message:
            return f"{self.message} ({self.error})"
        return super().__str__()
