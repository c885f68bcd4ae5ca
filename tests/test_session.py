# whole-session flows against a fake client

from conftest import FakeClient, city
from weatherview.models import NOT_FOUND_MESSAGE, WeatherUnit, format_temperature, temperature_color
from weatherview.session import WeatherSession

REGION_IDS = [(1,), (2,), (3,)]


def make_session(london, **kwargs):
    groups = {
        (1,): {"list": [city("Delhi", 31), city("Gurgaon", 30)]},
        (3,): {"list": [city("Srinagar", 8)]},
    }
    client = FakeClient(cities={"London": london}, groups=groups)
    return WeatherSession(client, region_ids=REGION_IDS, **kwargs)


def test_london_then_unknown_city(london):
    session = make_session(london)

    state = session.search("London")
    assert state.current.name == "London"
    assert format_temperature(state.current.temperature, state.unit) == "15"
    assert temperature_color(state.current.temperature) == "white"
    assert (state.history[0].name, state.history[0].temperature,
            state.history[0].description, state.history[0].wind_speed) == ("London", 15, "clear sky", 3.5)

    state = session.search("Nowhere123")
    assert state.current is None
    assert state.error == NOT_FOUND_MESSAGE
    assert len(state.history) == 1
    assert state.history[0].name == "London"


def test_blank_search_is_ignored(london):
    session = make_session(london, autoload=False)

    state = session.search("   ")

    assert state.search_request_id == 0
    assert not state.show_history
    assert session.client.calls == []


def test_regions_load_on_mount_and_skip_failures(london):
    session = make_session(london)

    assert [r.name for r in session.state.regions] == ["Delhi", "Srinagar"]


def test_toggle_refetches_regions_but_not_search(london):
    session = make_session(london)
    session.search("London")
    session.client.calls.clear()

    state = session.toggle_unit()

    assert state.unit is WeatherUnit.IMPERIAL
    assert [c[0] for c in session.client.calls] == ["group", "group", "group"]
    assert all(c[2] is WeatherUnit.IMPERIAL for c in session.client.calls)
    # celsius is stored, so the display follows the new unit
    assert format_temperature(state.current.temperature, state.unit) == "59.00"


def test_hover_shows_chart_and_leave_releases_it(london):
    session = make_session(london)

    session.hover("Delhi")
    chart = session.chart
    assert chart.spec.labels == ("Delhi", "Gurgaon")
    assert chart.spec.values == (31.0, 30.0)

    session.hover("Srinagar")
    assert chart.destroyed
    assert session.chart.spec.labels == ("Srinagar",)

    session.leave()
    assert session.chart is None


def test_toggle_releases_chart_until_hovered_again(london):
    session = make_session(london)
    session.hover("Delhi")
    before = session.chart

    state = session.toggle_unit()

    assert before.destroyed
    assert session.chart is None
    assert state.hovered is None
    session.hover("Delhi")
    assert session.chart.spec.y_title == "Temperature (°F)"


def test_reload_keeps_chart_on_same_region(london):
    session = make_session(london)
    session.hover("Delhi")
    before = session.chart

    session.load_regions()

    assert before.destroyed
    assert session.chart.spec.labels == ("Delhi", "Gurgaon")


def test_region_without_temperature_is_not_hoverable(london):
    client = FakeClient(groups={
        (1,): {"list": [{"name": "Delhi", "main": {"humidity": 40}, "weather": []}]},
        (2,): {"list": [city("Pune", 24)]},
    })
    session = WeatherSession(client, region_ids=[(1,), (2,)])

    assert [r.name for r in session.state.regions] == ["Pune"]
    assert session.hover("Delhi").hovered is None
    assert session.chart is None
