# File: pipe_flow_analyzer/core/exceptions.py
"""
Error and diagnostic types

Errors abort an analysis. Warnings are advisory and issued with
``warnings.warn`` so callers can filter or escalate them.
"""


class HydraulicsError(Exception):
    """Base class for pipe-flow analysis errors"""
    pass


class DomainError(HydraulicsError, ValueError):
    """Raised when a physical precondition is violated (Q<=0, D<=0, Re<=0 ...)"""
    pass


class InvalidCodeError(HydraulicsError, KeyError):
    """Raised when a material or fitting code is not in its catalog"""

    def __init__(self, kind: str, code: str, valid: str):
        self.kind = kind
        self.code = code
        self.valid = valid
        super().__init__(f"Invalid {kind} code: {code!r} (must be {valid})")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ConvergenceWarning(UserWarning):
    """Colebrook-White iteration hit its iteration cap"""
    pass


class FrictionRangeWarning(UserWarning):
    """Friction factor outside the typical [0.008, 0.10] band"""
    pass


class PumpSelectionWarning(UserWarning):
    """No catalog pump met the duty point; a fallback was used"""
    pass
