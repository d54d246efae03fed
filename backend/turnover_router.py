"""FastAPI router exposing turnover collision queries to the operations dashboard."""
from __future__ import annotations
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from turnover.expander import expand_collision_detail
from turnover.ops_summary import build_ops_board
from turnover.priority_watch import watch_priority_property
from turnover.scanner import scan_portfolio_collisions
from turnover.snapshot import DerivationCache, SnapshotStore
from turnover.types import payloads
from turnover.utils.dates import today_iso
from .models import CollisionDetailRequest, SnapshotRequest, SnapshotResponse
logger = logging.getLogger('turnover.api')
router = APIRouter()

STORE = SnapshotStore()
CACHE = DerivationCache()

_DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


def _resolve_today(today: Optional[str]) -> str:
    return today or today_iso()


@router.put('/snapshot', response_model=SnapshotResponse)
async def replace_snapshot(request: SnapshotRequest) -> SnapshotResponse:
    """Swap the portfolio snapshot the queries derive from."""
    try:
        snapshot = STORE.replace(
            properties=[p.to_domain() for p in request.properties] if request.properties is not None else None,
            reservations=[r.to_domain() for r in request.reservations] if request.reservations is not None else None,
            inventory=[i.to_domain() for i in request.inventory] if request.inventory is not None else None,
        )
        return SnapshotResponse(
            version=snapshot.version,
            properties=len(snapshot.properties),
            reservations=len(snapshot.reservations),
            inventory=len(snapshot.inventory),
        )
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception('Unable to replace snapshot: %s', exc)
        raise HTTPException(status_code=500, detail='Unable to replace snapshot.') from exc


@router.get('/critical-days')
async def critical_days(today: Optional[str] = Query(default=None, pattern=_DATE_PATTERN)) -> JSONResponse:
    """Return the soonest portfolio-wide collision days."""
    day = _resolve_today(today)
    try:
        snapshot = STORE.current()
        result = CACHE.get_or_compute(
            snapshot,
            ('critical-days', day),
            lambda: payloads(scan_portfolio_collisions(snapshot.reservation_index, day)),
        )
        return JSONResponse(content={'today': day, 'criticalDays': result})
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception('Unable to scan collisions: %s', exc)
        raise HTTPException(status_code=500, detail='Unable to scan collisions.') from exc


@router.get('/priority')
async def priority_watch(
    today: Optional[str] = Query(default=None, pattern=_DATE_PATTERN),
    marker: Optional[str] = Query(default=None, max_length=200),
) -> JSONResponse:
    """Return the next turnover for the priority property."""
    day = _resolve_today(today)
    try:
        snapshot = STORE.current()
        result = CACHE.get_or_compute(
            snapshot,
            ('priority', day, marker),
            lambda: watch_priority_property(
                snapshot.reservation_index, snapshot.property_index, day, marker=marker
            ).to_payload(),
        )
        return JSONResponse(content=result)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception('Unable to resolve priority watch: %s', exc)
        raise HTTPException(status_code=500, detail='Unable to resolve priority watch.') from exc


@router.post('/detail')
async def collision_detail(request: CollisionDetailRequest) -> JSONResponse:
    """Expand one collision day into outgoing/incoming guests per property."""
    try:
        snapshot = STORE.current()
        detail = expand_collision_detail(
            request.date, request.property_ids, snapshot.reservation_index, snapshot.property_index
        )
        return JSONResponse(content=detail.to_payload())
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception('Unable to expand collision detail: %s', exc)
        raise HTTPException(status_code=500, detail='Unable to expand collision detail.') from exc


@router.get('/board')
async def ops_board(today: Optional[str] = Query(default=None, pattern=_DATE_PATTERN)) -> JSONResponse:
    """Return the full operations board for the dashboard home."""
    day = _resolve_today(today)
    try:
        snapshot = STORE.current()
        board = CACHE.get_or_compute(snapshot, ('board', day), lambda: build_ops_board(snapshot, day))
        return JSONResponse(content=board)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception('Unable to build operations board: %s', exc)
        raise HTTPException(status_code=500, detail='Unable to build operations board.') from exc
