"""Ship service — CRUD, IMO validation, cascade delete, search."""

import pytest

from fleet_maintenance.core.exceptions import UnauthorizedError, ValidationError
from fleet_maintenance.models.constants import COMPONENTS, JOBS, SHIPS
from fleet_maintenance.services.fleet import FleetServices
from fleet_maintenance.services.ship_service import validate_imo


def _ship(**overrides):
    data = {
        "name": "Nordic Star",
        "imo": "9400001",
        "flag": "Norway",
        "status": "Active",
        "registration_date": "2015-04-01",
    }
    data.update(overrides)
    return data


class TestValidateImo:
    @pytest.mark.parametrize("imo", ["1234567", "0000000"])
    def test_valid(self, imo):
        validate_imo(imo)

    @pytest.mark.parametrize("imo", ["123", "12345678", "12a4567", "", None, 1234567])
    def test_invalid(self, imo):
        with pytest.raises(ValidationError, match="7 digits"):
            validate_imo(imo)


class TestCreateShip:
    def test_round_trip(self, admin, store):
        data = _ship()
        ship = admin.create_ship(data)
        assert ship["id"].startswith("s")
        assert admin.get_ship(ship["id"]) == {**data, "id": ship["id"]}
        # reloaded from storage by a fresh container
        assert FleetServices(store).get_ship(ship["id"]) == ship

    def test_returned_record_is_a_copy(self, admin, store):
        ship = admin.create_ship(_ship())
        ship["imo"] = "123"
        admin.get_ship(ship["id"])["imo"] = "456"
        admin.list_ships()[-1]["imo"] = "789"
        assert admin.get_ship(ship["id"])["imo"] == "9400001"
        assert {s["id"]: s for s in store.get_all(SHIPS)}[ship["id"]]["imo"] == "9400001"

    def test_updated_record_is_a_copy(self, admin):
        ship = admin.update_ship("s1", {"flag": "Malta"})
        ship["flag"] = "Nowhere"
        assert admin.get_ship("s1")["flag"] == "Malta"

    def test_ids_are_unique(self, admin):
        first = admin.create_ship(_ship())
        second = admin.create_ship(_ship(imo="9400002"))
        assert first["id"] != second["id"]

    def test_short_imo_rejected(self, admin):
        with pytest.raises(ValidationError):
            admin.create_ship(_ship(imo="123"))
        assert len(admin.list_ships()) == 2

    @pytest.mark.parametrize("role_fixture", ["inspector", "engineer"])
    def test_non_admin_rejected(self, role_fixture, request):
        fleet = request.getfixturevalue(role_fixture)
        with pytest.raises(UnauthorizedError):
            fleet.create_ship(_ship())

    def test_anonymous_rejected(self, fleet):
        with pytest.raises(UnauthorizedError):
            fleet.create_ship(_ship())


class TestUpdateShip:
    def test_merge(self, admin):
        ship = admin.update_ship("s1", {"status": "Docked"})
        assert ship["status"] == "Docked"
        assert ship["name"] == "Ever Given"

    def test_invalid_imo_rejected(self, admin):
        with pytest.raises(ValidationError):
            admin.update_ship("s1", {"imo": "98110"})
        assert admin.get_ship("s1")["imo"] == "9811000"

    def test_missing_returns_none(self, admin):
        assert admin.update_ship("nope", {"name": "X"}) is None

    def test_inspector_rejected(self, inspector):
        with pytest.raises(UnauthorizedError):
            inspector.update_ship("s1", {"name": "X"})


class TestDeleteShip:
    def test_cascades_to_components_and_jobs(self, admin, store):
        assert admin.delete_ship("s1") is True

        assert admin.get_ship("s1") is None
        assert admin.components_for_ship("s1") == []
        assert admin.jobs_for_ship("s1") == []
        # unrelated graph untouched
        assert admin.get_component("c3") is not None
        assert admin.get_job("j3") is not None
        # storage agrees with the caches
        assert [s["id"] for s in store.get_all(SHIPS)] == ["s2"]
        assert [c["id"] for c in store.get_all(COMPONENTS)] == ["c3"]
        assert [j["id"] for j in store.get_all(JOBS)] == ["j3"]

    def test_missing_returns_false(self, admin):
        assert admin.delete_ship("nope") is False
        assert len(admin.list_ships()) == 2

    def test_engineer_rejected(self, engineer):
        with pytest.raises(UnauthorizedError):
            engineer.delete_ship("s1")
        assert engineer.get_ship("s1") is not None
        assert len(engineer.components_for_ship("s1")) == 2


class TestSearchShips:
    def test_by_name_case_insensitive(self, fleet):
        assert [s["id"] for s in fleet.search_ships("ever")] == ["s1"]

    def test_by_imo(self, fleet):
        assert [s["id"] for s in fleet.search_ships("91642")] == ["s2"]

    def test_by_flag(self, fleet):
        assert [s["id"] for s in fleet.search_ships("usa")] == ["s2"]

    def test_empty_term_returns_all(self, fleet):
        assert len(fleet.search_ships("")) == 2
