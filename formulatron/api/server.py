"""
FastAPI server for the formula calculator.

Every client works in its own session: POST /sessions returns an id whose
Calculator owns an independent copy of the catalog. Sessions live in
process memory only. At most MAX_SESSIONS are kept; creating one more evicts
the oldest, and nothing expires on a timer. The variable endpoints
map one-to-one onto the calculator events (input, commit, focus, unit).
"""

import logging
import math
import uuid
from typing import Literal, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from formulatron import __version__
from formulatron.catalog.loader import build_catalog
from formulatron.config import ServerSettings
from formulatron.errors import FormulaNotFound, UnitNotFound
from formulatron.models.catalog import Formula
from formulatron.physics.units import UNIT_KINDS, base_unit_of, units_of_kind
from formulatron.session import Calculator

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Formulatron API",
    description="""
    Astronomy formula calculator.

    Create a session, then drive a formula with input/commit/focus/unit
    events. Non-finite values are returned as null.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Read-only catalog used for listings; sessions build their own
_reference_catalog = build_catalog()

# Insertion-ordered, so the first key is the oldest session
_sessions: dict[str, Calculator] = {}

MAX_SESSIONS = ServerSettings().max_sessions


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class SessionResponse(BaseModel):
    session_id: str


class FormulaSummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    symbols: list[str]


class GroupSummary(BaseModel):
    id: str
    name: str
    forms: list[FormulaSummary]


class VariableView(BaseModel):
    """What a display needs to render one variable."""
    id: str
    name: str
    symbol: str
    prefix: str
    mantissa: Optional[float] = Field(None, description="null when non-finite")
    exponent: Optional[float] = Field(None, description="null when non-finite")
    value: Optional[float] = Field(None, description="Value in default-unit terms; null when non-finite")
    unit: Optional[str] = None
    default_unit: Optional[str] = None
    pending: dict[str, str] = Field(default_factory=dict, description="Raw text still being typed")


class FormulaView(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    order: list[str]
    variables: list[VariableView]


class InputRequest(BaseModel):
    """A keystroke in a mantissa or exponent field."""
    field: Literal["mantissa", "exponent"]
    raw: Union[float, str, None] = Field(None, description="Field content, possibly partial")


class UnitRequest(BaseModel):
    unit: str


class UnitChoices(BaseModel):
    units: list[str]
    error: Optional[str] = None


def _finite(x: float) -> Optional[float]:
    return x if math.isfinite(x) else None


def _view(formula: Formula) -> FormulaView:
    return FormulaView(
        id=formula.id,
        name=formula.name,
        description=formula.description,
        order=list(formula.order),
        variables=[
            VariableView(
                id=v.id,
                name=v.name,
                symbol=v.symbol,
                prefix=v.prefix,
                mantissa=_finite(v.mantissa),
                exponent=_finite(v.exponent),
                value=_finite(v.value),
                unit=v.unit,
                default_unit=v.default_unit,
                pending=dict(v.pending),
            )
            for v in formula.variables.values()
        ],
    )


def _session(session_id: str) -> Calculator:
    try:
        return _sessions[session_id]
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id!r}") from None


def _apply(action, *args) -> FormulaView:
    """Run a calculator event, mapping domain errors onto HTTP errors."""
    try:
        return _view(action(*args))
    except FormulaNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (UnitNotFound, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/catalog", response_model=list[GroupSummary], tags=["Reference"])
async def list_catalog():
    """List formula groups and their formulas."""
    return [
        GroupSummary(
            id=group_id,
            name=group.name,
            forms=[
                FormulaSummary(
                    id=form_id,
                    name=form.name,
                    description=form.description,
                    symbols=[v.symbol for v in form.variables.values()],
                )
                for form_id, form in group.forms.items()
            ],
        )
        for group_id, group in _reference_catalog.groups.items()
    ]


@app.get("/units", tags=["Reference"])
async def list_units():
    """List quantity kinds with their base unit and units."""
    return {
        kind: {"base": base_unit_of(kind), "units": units_of_kind(kind)}
        for kind in UNIT_KINDS
    }


@app.get("/units/{kind}", tags=["Reference"])
async def list_units_of_kind(kind: str):
    """List the units of one quantity kind."""
    try:
        return {"kind": kind, "base": base_unit_of(kind), "units": units_of_kind(kind)}
    except UnitNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/sessions", response_model=SessionResponse, status_code=201, tags=["Sessions"])
async def create_session():
    """Start a calculator session with its own copy of the catalog."""
    while len(_sessions) >= MAX_SESSIONS:
        oldest = next(iter(_sessions))
        del _sessions[oldest]
        logger.info("Evicted session %s (limit %d)", oldest, MAX_SESSIONS)
    session_id = uuid.uuid4().hex
    _sessions[session_id] = Calculator()
    logger.info("Created session %s", session_id)
    return SessionResponse(session_id=session_id)


@app.delete("/sessions/{session_id}", status_code=204, tags=["Sessions"])
async def delete_session(session_id: str):
    """Discard a session."""
    _session(session_id)
    del _sessions[session_id]
    logger.info("Deleted session %s", session_id)


@app.get("/sessions/{session_id}/forms/{group_id}/{form_id}", response_model=FormulaView, tags=["Formulas"])
async def get_form(session_id: str, group_id: str, form_id: str):
    """Current state of a formula in this session."""
    return _apply(_session(session_id).form, group_id, form_id)


@app.post(
    "/sessions/{session_id}/forms/{group_id}/{form_id}/variables/{variable_id}/input",
    response_model=FormulaView,
    tags=["Formulas"],
)
async def input_field(session_id: str, group_id: str, form_id: str, variable_id: str, body: InputRequest):
    """Type into a mantissa or exponent field; the field itself is not overwritten."""
    return _apply(_session(session_id).on_input, group_id, form_id, variable_id, body.field, body.raw)


@app.post(
    "/sessions/{session_id}/forms/{group_id}/{form_id}/variables/{variable_id}/commit",
    response_model=FormulaView,
    tags=["Formulas"],
)
async def commit_field(session_id: str, group_id: str, form_id: str, variable_id: str):
    """Commit a variable's fields and re-derive it along with the chain."""
    return _apply(_session(session_id).on_commit, group_id, form_id, variable_id)


@app.post(
    "/sessions/{session_id}/forms/{group_id}/{form_id}/variables/{variable_id}/focus",
    response_model=FormulaView,
    tags=["Formulas"],
)
async def focus_field(session_id: str, group_id: str, form_id: str, variable_id: str):
    """Focus a variable: it moves to the end of the recalculation chain."""
    return _apply(_session(session_id).on_focus, group_id, form_id, variable_id)


@app.post(
    "/sessions/{session_id}/forms/{group_id}/{form_id}/variables/{variable_id}/unit",
    response_model=FormulaView,
    tags=["Formulas"],
)
async def change_unit(session_id: str, group_id: str, form_id: str, variable_id: str, body: UnitRequest):
    """Pick a display unit for a variable."""
    return _apply(_session(session_id).on_unit_change, group_id, form_id, variable_id, body.unit)


@app.get(
    "/sessions/{session_id}/forms/{group_id}/{form_id}/variables/{variable_id}/units",
    response_model=UnitChoices,
    tags=["Formulas"],
)
async def unit_choices(session_id: str, group_id: str, form_id: str, variable_id: str):
    """
    Units a variable can be shown in.

    Fails closed: if the variable's unit is not registered, no choices are
    offered and the error is reported alongside.
    """
    calculator = _session(session_id)
    try:
        return UnitChoices(units=calculator.unit_choices(group_id, form_id, variable_id))
    except FormulaNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnitNotFound as e:
        logger.warning("No unit choices for %s/%s/%s: %s", group_id, form_id, variable_id, e)
        return UnitChoices(units=[], error=str(e))
