class MatchEngineError(RuntimeError):
    """Base class for internal invariant violations.

    These indicate a logic or configuration defect. They are raised where the
    problem is detected and are never retried.
    """


class CascadeLimitExceeded(MatchEngineError):
    def __init__(self, steps: int):
        super().__init__(f"Cascade did not settle within {steps} steps")
        self.steps = steps


class ShuffleFailed(MatchEngineError):
    def __init__(self, attempts: int, remaining: int):
        super().__init__(
            f"Unable to shuffle board without matches after {attempts} attempts "
            f"({remaining} tiles still in runs)"
        )
        self.attempts = attempts
        self.remaining = remaining


class UnstableGridError(MatchEngineError):
    """A grid expected to be stable holds a run or an empty cell."""


class ConfigError(ValueError):
    pass
