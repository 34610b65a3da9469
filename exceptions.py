"""
Custom exceptions for the match tracker with user-friendly error messages.
"""


class TrackerException(Exception):
    """Base exception for tracker errors."""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class InvalidMatchData(TrackerException):
    """Raised when a match record is malformed and must not be aggregated."""

    def __init__(self, reason: str, match_id: str = None):
        prefix = f"Match '{match_id}'" if match_id else "Match"
        super().__init__(
            f"{prefix} is invalid: {reason}",
            f"❌ {reason}"
        )
        self.reason = reason
        self.match_id = match_id


class PlayerNotFoundError(TrackerException):
    """Raised when a player id is not in the directory and has no matches."""

    def __init__(self, player_id: str):
        super().__init__(
            f"Player '{player_id}' not found",
            "❌ That player isn't registered and hasn't played any matches!"
        )
        self.player_id = player_id


class PlayerAlreadyExistsError(TrackerException):
    """Raised when registering a player id that is already taken."""

    def __init__(self, player_id: str):
        super().__init__(
            f"Player '{player_id}' already exists",
            "❌ That player is already registered!"
        )
        self.player_id = player_id


class MatchNotFoundError(TrackerException):
    """Raised when a match id does not exist."""

    def __init__(self, match_id: str):
        super().__init__(
            f"Match '{match_id}' not found",
            f"❌ Match `{match_id}` doesn't exist (already deleted?)"
        )
        self.match_id = match_id


class InvalidAchievementRule(TrackerException):
    """Raised when the achievement table contains an unusable rule."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Achievement rule '{key}' is invalid: {reason}",
            "❌ Achievement configuration is broken. Ask an admin to check it."
        )
        self.key = key
        self.reason = reason


class InvalidShameRule(TrackerException):
    """Raised when the Hall of Shame table contains an unusable rule."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Shame rule '{key}' is invalid: {reason}",
            "❌ Hall of Shame configuration is broken. Ask an admin to check it."
        )
        self.key = key
        self.reason = reason
