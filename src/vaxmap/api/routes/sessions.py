"""Screen session endpoints backing the map and list views of a client."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ...data.catalog_repository import LocationNotFoundError
from ...models.domain import Coordinate
from ...schemas.locations import LocationModel
from ...schemas.sessions import (
    CoordinateModel,
    ListScreenResponse,
    MapRegionModel,
    MapScreenResponse,
    PositionFailureRequest,
    SelectionRequest,
    SessionResponse,
    SetFiltersRequest,
    ToggleFilterRequest,
    sorted_filters,
)
from ...services.screens import ScreenSession, SessionNotFoundError, registry

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _session(session_id: str) -> ScreenSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _map_response(session: ScreenSession, in_region: bool = False) -> MapScreenResponse:
    screen = session.map_screen
    selected = screen.selected_location
    position = screen.user_position
    return MapScreenResponse(
        session_id=session.id,
        filters=sorted_filters(screen.filters),
        region=MapRegionModel.from_region(screen.region),
        has_initially_centered=screen.has_initially_centered,
        user_position=CoordinateModel(latitude=position.latitude, longitude=position.longitude) if position else None,
        selected=LocationModel.from_location(selected) if selected else None,
        annotations=[LocationModel.from_location(location) for location in screen.annotations(in_region=in_region)],
    )


def _list_response(session: ScreenSession, position: Coordinate | None = None) -> ListScreenResponse:
    rows = session.list_screen.rows(position)
    return ListScreenResponse(
        session_id=session.id,
        filters=sorted_filters(session.list_screen.filters),
        total=len(rows),
        rows=[LocationModel.from_location(row.location, distance_km=row.distance_km) for row in rows],
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session() -> SessionResponse:
    try:
        session = registry.create()
    except (FileNotFoundError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load catalog: {exc}",
        ) from exc
    return SessionResponse(session_id=session.id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str) -> None:
    try:
        registry.delete(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


# Map screen


@router.get("/{session_id}/map", response_model=MapScreenResponse)
def get_map_screen(
    session_id: str,
    in_region: bool = Query(default=False, description="Only return annotations inside the current region"),
) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        return _map_response(session, in_region=in_region)


@router.post("/{session_id}/map/filters/toggle", response_model=MapScreenResponse)
def toggle_map_filter(session_id: str, payload: ToggleFilterRequest) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.toggle(payload.vaccine)
        return _map_response(session)


@router.post("/{session_id}/map/filters/clear", response_model=MapScreenResponse)
def clear_map_filters(session_id: str) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.clear()
        return _map_response(session)


@router.post("/{session_id}/map/filters/all", response_model=MapScreenResponse)
def select_all_map_filters(session_id: str) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.select_all()
        return _map_response(session)


@router.put("/{session_id}/map/filters", response_model=MapScreenResponse)
def set_map_filters(session_id: str, payload: SetFiltersRequest) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.set_filters(payload.vaccines)
        return _map_response(session)


@router.post("/{session_id}/map/position", response_model=MapScreenResponse)
def report_position(session_id: str, payload: CoordinateModel) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.on_location_fix(Coordinate(payload.latitude, payload.longitude))
        return _map_response(session)


@router.post("/{session_id}/map/position/failure", response_model=MapScreenResponse)
def report_position_failure(session_id: str, payload: PositionFailureRequest | None = None) -> MapScreenResponse:
    payload = payload or PositionFailureRequest()
    session = _session(session_id)
    with session.lock:
        if payload.denied:
            session.map_screen.on_authorization_denied()
        else:
            session.map_screen.on_location_failure(payload.reason)
        return _map_response(session)


@router.post("/{session_id}/map/recenter", response_model=MapScreenResponse)
def recenter_map(session_id: str) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.recenter()
        return _map_response(session)


@router.post("/{session_id}/map/selection", response_model=MapScreenResponse)
def select_location(session_id: str, payload: SelectionRequest) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        try:
            session.map_screen.select(payload.location_id)
        except LocationNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return _map_response(session)


@router.delete("/{session_id}/map/selection", response_model=MapScreenResponse)
def deselect_location(session_id: str) -> MapScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.map_screen.deselect()
        return _map_response(session)


# List screen


@router.get("/{session_id}/list", response_model=ListScreenResponse)
def get_list_screen(
    session_id: str,
    latitude: float | None = Query(default=None, ge=-90.0, le=90.0),
    longitude: float | None = Query(default=None, ge=-180.0, le=180.0),
) -> ListScreenResponse:
    position = None
    if latitude is not None and longitude is not None:
        position = Coordinate(latitude, longitude)
    session = _session(session_id)
    with session.lock:
        return _list_response(session, position)


@router.post("/{session_id}/list/filters/toggle", response_model=ListScreenResponse)
def toggle_list_filter(session_id: str, payload: ToggleFilterRequest) -> ListScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.list_screen.toggle(payload.vaccine)
        return _list_response(session)


@router.post("/{session_id}/list/filters/clear", response_model=ListScreenResponse)
def clear_list_filters(session_id: str) -> ListScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.list_screen.clear()
        return _list_response(session)


@router.post("/{session_id}/list/filters/all", response_model=ListScreenResponse)
def select_all_list_filters(session_id: str) -> ListScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.list_screen.select_all()
        return _list_response(session)


@router.put("/{session_id}/list/filters", response_model=ListScreenResponse)
def set_list_filters(session_id: str, payload: SetFiltersRequest) -> ListScreenResponse:
    session = _session(session_id)
    with session.lock:
        session.list_screen.set_filters(payload.vaccines)
        return _list_response(session)


@router.get("/{session_id}/list/{location_id}/focus", response_model=MapRegionModel)
def focus_list_location(session_id: str, location_id: str) -> MapRegionModel:
    session = _session(session_id)
    with session.lock:
        try:
            region = session.list_screen.focus(location_id)
        except LocationNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return MapRegionModel.from_region(region)
