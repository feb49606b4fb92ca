"""Domain errors raised by the thought and profile services"""

LOAD_THOUGHTS_FAILED = "Failed to load thoughts."
ADD_THOUGHT_FAILED = "Failed to add thought."
UPDATE_THOUGHT_FAILED = "Failed to update thought."
DELETE_THOUGHT_FAILED = "Failed to delete thought."
TOGGLE_HIDDEN_FAILED = "Failed to toggle thought visibility."
LOAD_PROFILE_FAILED = "Failed to load profile."
UPDATE_PROFILE_FAILED = "Failed to update profile."


class ThoughtServiceError(Exception):
    """A remote operation failed; the message is safe to show to the user"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ThoughtValidationError(ValueError):
    """Input rejected before any remote call was made"""


class ThoughtNotFoundError(LookupError):
    """
    A thought id is absent from the in-memory state.

    This means the local view and the caller disagree, so it is raised
    instead of being retried or ignored.
    """

    def __init__(self, thought_id: str):
        super().__init__(f"Thought {thought_id} not found")
        self.thought_id = thought_id


class ThoughtOperationInProgressError(RuntimeError):
    """Another mutation of the same thought has not settled yet"""

    def __init__(self, thought_id: str):
        super().__init__(f"An operation on thought {thought_id} is already in progress")
        self.thought_id = thought_id
