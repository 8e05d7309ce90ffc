from pydantic import BaseModel


class IdAllocation(BaseModel):
    value: int
    # The atomic increment failed and the value fell back to 0 before any backfill.
    degraded: bool = False
    # The counter was fast-forwarded past a caller-supplied maximum.
    backfilled: bool = False
