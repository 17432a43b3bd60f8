"""
Django Partyman - Prospect/customer persistence.

Usage:
    from partyman import PartyService
    from partyman.gates import Gates, GateError, GateResult

    view = await PartyService.create({"first_name": "Jane", "email": "jane@x.com"})
    view = await PartyService.update(view.id, {"phone": "555-1111"})
    result = await PartyService.convert(view.id, confirmed=True)
"""


def __getattr__(name):
    if name == "PartyService":
        from partyman.service import PartyService

        return PartyService
    if name == "Gates":
        from partyman.gates import Gates

        return Gates
    if name == "GateError":
        from partyman.gates import GateError

        return GateError
    if name == "GateResult":
        from partyman.gates import GateResult

        return GateResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["PartyService", "Gates", "GateError", "GateResult"]
__version__ = "0.1.0"
