from __future__ import annotations

from mindset import MindsetContext, MindsetEvent
from session import StorySession, emit, mindset_message


def test_enter_era():
    session = StorySession(load_timeline=False)
    context = session.enter_era("altair_1975")

    assert context.year == 1975
    assert session.mindset is context
    assert session.current_era_id == "altair_1975"


def test_enter_unknown_era_keeps_mindset():
    session = StorySession(load_timeline=False)
    session.enter_era("altair_1975")

    assert session.enter_era("atlantis") is None
    assert session.mindset.year == 1975


def test_set_mindset_from_content():
    session = StorySession(load_timeline=False)
    session.enter_era("altair_1975")
    session.set_mindset(MindsetContext(year=1984))

    assert session.current_era_id is None
    assert session.get_state()["mindset"]["year"] == 1984


def test_new_filter_reads_session_store():
    session = StorySession(load_timeline=False)
    text_filter = session.new_filter()
    assert text_filter.is_anachronism("internet") is False

    session.enter_era("intel_4004_1971")
    assert text_filter.is_anachronism("internet") is True


def test_scene_filter_uses_session_store():
    session = StorySession(load_timeline=False)
    session.enter_era("intel_4004_1971")
    assert session.scene_filter().filter_text("Buy a laptop.") == "Buy a portable computer."


def test_reset_keeps_session_listeners():
    events = []
    session = StorySession(load_timeline=False)
    session.subscribe(lambda event, payload: events.append(event))

    session.enter_era("altair_1975")
    session.reset()
    session.enter_era("ibm_pc_1981")

    assert session.current_era_id == "ibm_pc_1981"
    assert events == [MindsetEvent.ESTABLISHED, MindsetEvent.ESTABLISHED]


def test_reset_reloads_timeline():
    session = StorySession()
    assert session.timeline.is_loaded is True

    session.reset()

    assert session.mindset is None
    assert session.timeline.find_technology("transistor") is not None


def test_clear_mindset():
    session = StorySession(load_timeline=False)
    session.enter_era("altair_1975")
    session.clear_mindset()

    assert session.get_state() == {"era_id": None, "mindset": None, "timeline_loaded": False}


def test_emit_message_shape():
    message = emit("state", {"era_id": None})
    assert message["type"] == "state"
    assert message["data"] == {"era_id": None}
    assert "timestamp" in message
    assert emit("ping")["data"] == {}


def test_mindset_message_serializes_contexts():
    previous = MindsetContext(year=1971)
    current = MindsetContext(year=1975)
    message = mindset_message(MindsetEvent.CHANGED, {"previous": previous, "current": current})

    assert message["type"] == "mindset_changed"
    assert message["data"]["previous"]["year"] == 1971
    assert message["data"]["current"]["year"] == 1975
