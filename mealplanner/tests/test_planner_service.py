import json
import logging
import pytest
from concurrent.futures import ThreadPoolExecutor

from mealplanner.domain.errors import NotFoundError, PersistenceError, ValidationError
from mealplanner.events.Event_Bus import EventBus, MEAL_DELETED, PLAN_SLOT_CLEARED
from mealplanner.infra.Meal_Repository import MealRepository
from mealplanner.infra.Plan_Repository import PlanRepository
from mealplanner.logic.planner_service import PlannerService


@pytest.fixture
def planner(tmp_path):
    service = PlannerService(MealRepository(tmp_path), PlanRepository(tmp_path), EventBus()).load()
    service.add_meal("Pasta", "tomato\npasta")
    service.add_meal("Salad", "lettuce\ntomato")
    return service


def _reload(tmp_path):
    return PlannerService(MealRepository(tmp_path), PlanRepository(tmp_path), EventBus()).load()


def test_mutations_are_persisted(planner, tmp_path):
    planner.assign("Monday", "Pasta")
    planner.assign("Wednesday", "Salad")
    reloaded = _reload(tmp_path)
    assert [m.name for m in reloaded.list_meals()] == ["Pasta", "Salad"]
    assert reloaded.generate_shopping_list().labels() == ["tomato (2x)", "pasta", "lettuce"]


def test_delete_meal_assigned_to_two_days(planner, tmp_path):
    bus_events = []
    planner.event_bus.subscribe(MEAL_DELETED, lambda name, payload: bus_events.append(name))
    planner.event_bus.subscribe(PLAN_SLOT_CLEARED, lambda name, payload: bus_events.append(payload["day"]))
    pasta = planner.find_meal_by_name("Pasta")
    planner.assign("Monday", "Pasta")
    planner.assign("Friday", "Pasta")
    planner.assign("Tuesday", "Salad")

    meal, cleared = planner.delete_meal(pasta.id)

    assert meal.id == pasta.id
    assert cleared == ["Monday", "Friday"]
    assert planner.plan_view()["Monday"] is None
    assert planner.plan_view()["Friday"] is None
    assert planner.generate_shopping_list().labels() == ["lettuce", "tomato"]
    assert bus_events == [MEAL_DELETED, "Monday", "Friday"]
    stored_plan = json.loads((tmp_path / "plan.json").read_text(encoding="utf-8"))
    assert pasta.id not in stored_plan.values()


def test_validation_error_changes_nothing(planner, tmp_path):
    before = (tmp_path / "meals.json").read_text(encoding="utf-8")
    with pytest.raises(ValidationError):
        planner.add_meal("Soup", "   ")
    salad = planner.find_meal_by_name("Salad")
    with pytest.raises(ValidationError):
        planner.update_meal(salad.id, name="Green Salad", ingredients=" \n")
    assert salad.name == "Salad"
    assert (tmp_path / "meals.json").read_text(encoding="utf-8") == before


def test_update_meal_renames_and_edits(planner):
    salad = planner.find_meal_by_name("Salad")
    planner.assign("Thursday", "Salad")
    meal = planner.update_meal(salad.id, name="Green Salad", ingredients="lettuce\ncucumber")
    assert meal.name == "Green Salad"
    assert planner.plan_view()["Thursday"] == {"id": salad.id, "name": "Green Salad"}
    assert planner.generate_shopping_list().labels() == ["lettuce", "cucumber"]


def test_unknown_targets_raise_not_found(planner):
    with pytest.raises(NotFoundError):
        planner.delete_meal("missing")
    with pytest.raises(NotFoundError):
        planner.get_meal("missing")
    planner.generate_shopping_list()
    with pytest.raises(NotFoundError):
        planner.check(10)


def test_load_repairs_dangling_and_legacy_plan(tmp_path):
    (tmp_path / "meals.json").write_text(json.dumps({"meals": [
        {"id": "p1", "name": "Pasta", "ingredients": ["tomato", "pasta"]},
    ]}), encoding="utf-8")
    (tmp_path / "plan.json").write_text(json.dumps(
        {"Monday": "Pasta", "Tuesday": "Deleted Meal", "Wednesday": "p1"}), encoding="utf-8")
    service = _reload(tmp_path)
    assert service.plan.to_dict() == {"Monday": "p1", "Wednesday": "p1"}
    stored = json.loads((tmp_path / "plan.json").read_text(encoding="utf-8"))
    assert stored == {"Monday": "p1", "Wednesday": "p1"}


def test_checked_state_is_persisted_by_item_id(planner, tmp_path):
    planner.assign("Monday", "Pasta")
    planner.assign("Wednesday", "Salad")
    planner.generate_shopping_list()
    planner.check(2)
    reloaded = _reload(tmp_path)
    items = reloaded.generate_shopping_list().items
    assert [i.checked for i in items] == [False, False, True]
    assert reloaded.clear_checked() == 1
    assert reloaded.shopping_list.labels() == ["tomato (2x)", "pasta"]
    assert json.loads((tmp_path / "shopping_checked.json").read_text(encoding="utf-8")) == []


def test_check_before_generate_builds_list(planner):
    planner.assign("Monday", "Pasta")
    item = planner.check(0)
    assert item.label == "tomato"
    assert item.checked


def test_persistence_failure_is_logged_not_fatal(planner, monkeypatch, caplog):
    def failing_save(meals):
        raise PersistenceError("read-only file system")

    monkeypatch.setattr(planner.meal_repository, "save_meals", failing_save)
    with caplog.at_level(logging.ERROR):
        meal = planner.add_meal("Soup", "water\nonion")
    assert planner.find_meal_by_name("Soup") is meal
    assert "Saving meals failed" in caplog.text


def test_merge_remote_persists_new_meals_only(planner, tmp_path):
    added = planner.merge_remote([
        {"name": "Pasta", "ingredients": ["remote pasta"]},
        {"name": "Curry", "ingredients": ["rice", "chicken"]},
    ])
    assert [m.name for m in added] == ["Curry"]
    assert [m.name for m in _reload(tmp_path).list_meals()] == ["Pasta", "Salad", "Curry"]


def test_concurrent_mutations_from_threads(planner):
    names = [f"Meal {i}" for i in range(20)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda name: planner.add_meal(name, "rice"), names))
        list(pool.map(lambda day: planner.assign(day, "Pasta"), ["Monday", "Tuesday", "Friday"]))
        # wrappers around update_meal must not deadlock on the service lock
        pool.submit(planner.edit_ingredients, planner.find_meal_by_name("Salad").id, "lettuce").result(timeout=5)
    assert len(planner.list_meals()) == 22
    assert planner.generate_shopping_list().labels() == ["tomato (3x)", "pasta (3x)"]
