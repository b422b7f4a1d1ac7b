"""Recoverable error types raised at the analysis and edit boundaries."""


class InputValidationError(ValueError):
    """Input text is empty, blank, or above the character ceiling."""


class StaleSpanError(LookupError):
    """A suggestion's recorded text can no longer be found in the document."""

    def __init__(self, suggestion_id: str) -> None:
        self.suggestion_id = suggestion_id
        super().__init__(
            f"Suggestion {suggestion_id} no longer lines up with the current "
            "text. Run the analysis again."
        )
