from pathlib import Path

import pytest

from src.fleetroute.persistence import database
from src.fleetroute.persistence.filesystem import FileStorage, run_slug


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="route_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == (tmp_path / "outputs").resolve()


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="route_test")

    summary_path = run_dir / "summary.json"
    waypoints_path = run_dir / "waypoints.csv"

    storage.write_json(summary_path, {"hello": "world"})
    storage.write_csv(waypoints_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert waypoints_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_route_crud_round_trip(fake_supabase) -> None:
    first = database.create_route({"route_name": "Morning", "status": "planned", "driver_id": None})
    second = database.create_route({"route_name": "Evening", "distance_miles": 12.5})

    assert first["distance_miles"] == 0
    assert "driver_id" not in first
    assert [route["route_name"] for route in database.get_routes()] == ["Evening", "Morning"]
    assert database.get_route_by_id(second["id"])["distance_miles"] == 12.5

    updated = database.update_route(first["id"], {"status": "active"})
    assert updated["status"] == "active"
    assert database.update_route("missing", {"status": "active"}) is None

    assert database.delete_route(first["id"]) is True
    assert database.delete_route(first["id"]) is False
    assert database.get_route_by_id(first["id"]) is None


def test_route_waypoints_are_returned_in_sequence(fake_supabase) -> None:
    for sequence in (3, 1, 2):
        database.create_route_waypoint(
            {"route_id": "r-1", "sequence_number": sequence, "name": f"Stop {sequence}", "latitude": 0, "longitude": 0}
        )
    database.create_route_waypoint({"route_id": "r-2", "sequence_number": 1, "name": "Other", "latitude": 0, "longitude": 0})

    waypoints = database.get_route_waypoints("r-1")

    assert [wp["sequence_number"] for wp in waypoints] == [1, 2, 3]
    target = waypoints[0]["id"]
    assert database.update_route_waypoint(target, {"status": "completed"})["status"] == "completed"
    assert database.delete_route_waypoint(target) is True
    assert len(database.get_route_waypoints("r-1")) == 2


def test_route_analytics_accepts_single_row_and_batches(fake_supabase) -> None:
    single = database.create_route_analytics(
        {"route_id": "r-1", "metric_type": "time_savings", "baseline_value": 0, "optimized_value": 5, "improvement_percentage": 5}
    )
    batch = database.create_route_analytics(
        [
            {"route_id": "r-1", "metric_type": "fuel_efficiency", "baseline_value": 0, "optimized_value": 2.5, "improvement_percentage": 10},
            {"route_id": "r-2", "metric_type": "fuel_efficiency", "baseline_value": 0, "optimized_value": 1.0, "improvement_percentage": 10},
        ]
    )

    assert len(single) == 1
    assert len(batch) == 2
    assert database.create_route_analytics([]) == []
    assert len(database.get_route_analytics("r-1")) == 2


def test_active_ids_filter_by_status_and_limit(fake_supabase) -> None:
    fake_supabase.seed(
        "vehicles",
        *({"id": f"veh-{i}", "status": "active"} for i in range(5)),
        {"id": "veh-retired", "status": "retired"},
    )
    fake_supabase.seed("drivers", {"id": "drv-1", "status": "inactive"})

    assert database.get_active_vehicle_ids(limit=3) == ["veh-0", "veh-1", "veh-2"]
    assert database.get_active_driver_ids() == []


def test_reads_degrade_and_writes_fail_without_database(no_supabase) -> None:
    assert database.get_routes() == []
    assert database.get_route_by_id("r-1") is None
    assert database.get_route_waypoints("r-1") == []
    assert database.get_route_analytics("r-1") == []
    assert database.get_active_vehicle_ids() == []

    with pytest.raises(database.DatabaseNotConfiguredError):
        database.create_route({"route_name": "Morning"})
    with pytest.raises(database.DatabaseNotConfiguredError):
        database.delete_route_waypoint("w-1")


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("weekly test", "weekly_test"),
        ("x/../../../escaped/pwn", "x_escaped_pwn"),
        ("..", "optimization"),
        (None, "optimization"),
        ("route-7_A", "route-7_A"),
    ],
)
def test_run_slug_keeps_a_single_safe_component(label, expected):
    assert run_slug(label) == expected


def test_run_directory_stays_inside_output_root(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path / "data")
    run_dir = storage.make_run_directory(prefix="route_x/../../../escaped/pwn")

    assert run_dir.parent == (tmp_path / "data" / "outputs").resolve()
    assert run_dir.name.startswith("route_x_escaped_pwn_")
    assert not (tmp_path / "escaped").exists()
