class HandTrackingError(RuntimeError):
    """Camera or hand detector could not be acquired."""
