# tests/services/test_location_service.py
import pytest

from app.services.errors import ConflictError, NotFoundError
from app.services.location_service import LocationService
from tests.factories import ADMIN_ID, LOCATION_ID, make_asset

pytestmark = [pytest.mark.asyncio, pytest.mark.pg]


async def test_get_or_create_is_idempotent(session):
    svc = LocationService(session)
    a = await svc.get_or_create(building=" Annex ", floor="3", room="301", user_id=ADMIN_ID)
    b = await svc.get_or_create(building="Annex", floor="3", room="301")
    assert a.id == b.id
    assert a.building == "Annex"
    assert a.full_location == "Annex - 3 - 301"


async def test_floor_is_optional(session):
    svc = LocationService(session)
    a = await svc.get_or_create(building="Annex", room="Lobby")
    b = await svc.get_or_create(building="Annex", floor="  ", room="Lobby")
    assert a.id == b.id
    assert a.floor is None


async def test_building_and_room_are_required(session):
    with pytest.raises(ValueError):
        await LocationService(session).get_or_create(building="", room="1")


async def test_deactivate_hides_from_active_list(session):
    svc = LocationService(session)
    loc = await svc.get_or_create(building="Annex", floor="1", room="102")
    await svc.set_active(loc.id, False, user_id=ADMIN_ID)

    active = [x.id for x in await svc.list_locations(active_only=True)]
    every = [x.id for x in await svc.list_locations()]
    assert loc.id not in active
    assert loc.id in every


async def test_location_in_use_cannot_be_deleted(session):
    svc = LocationService(session)
    await make_asset(session, location_id=LOCATION_ID)
    assert await svc.is_in_use(LOCATION_ID)
    with pytest.raises(ConflictError):
        await svc.delete(LOCATION_ID, user_id=ADMIN_ID)


async def test_unused_location_is_deleted(session):
    svc = LocationService(session)
    loc = await svc.get_or_create(building="Annex", floor="B", room="Store")
    await svc.delete(loc.id, user_id=ADMIN_ID)
    with pytest.raises(NotFoundError):
        await svc.get(loc.id)
