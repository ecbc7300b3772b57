"""
Failure kinds surfaced by the lifecycle services.

``NotFound`` is a client-correctable condition; ``ConstraintViolation``
means the store rejected a write and the caller has to fix the payload;
``StoreUnavailable`` is an infrastructure fault.  The HTTP mapping lives
in ``app.main``.
"""


class QnaError(Exception):
    """Base class for every failure raised by the service core."""


class NotFound(QnaError):
    code = "ENTITY_NOT_FOUND"

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found")

    @property
    def message(self) -> str:
        return f"{self.kind} not found"


class ConstraintViolation(QnaError):
    """
    The store refused a write (uniqueness, NOT NULL or foreign key).

    *detail* is the driver's own diagnostic text and *sql_state* the
    SQLSTATE code when the driver reports one.
    """

    def __init__(self, detail: str, sql_state: str | None = None) -> None:
        self.detail = detail
        self.sql_state = sql_state
        super().__init__(detail)


class StoreUnavailable(QnaError):
    def __init__(self, detail: str = "Store unavailable") -> None:
        self.detail = detail
        super().__init__(detail)
