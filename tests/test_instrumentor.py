import json

from emerald.instrumentor import (
    InstrumentationTimer,
    Instrumentor,
    ProfileResult,
    cleanup_output_string,
)


def read_trace(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_get_returns_shared_instance(tmp_path):
    path = tmp_path / "shared.json"
    Instrumentor.get().begin_session("shared", str(path))
    try:
        assert Instrumentor.get().session_name == "shared"
    finally:
        Instrumentor.get().end_session()
    assert Instrumentor.get().session_name is None
    assert read_trace(path)["traceEvents"] == [{}]


def test_empty_session_file(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("Startup", str(path))
    assert inst.session_name == "Startup"
    inst.end_session()
    assert path.read_text(encoding="utf-8") == '{"otherData": {},"traceEvents":[{}]}'
    assert inst.session_name is None


def test_write_profile_format(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("Runtime", str(path))
    inst.write_profile(ProfileResult("f", 1.5, 42, 7))
    inst.end_session()
    text = path.read_text(encoding="utf-8")
    assert ',{"cat":"function","dur":42,"name":"f","ph":"X","pid":0,"tid":7,"ts":1.500}' in text
    events = read_trace(path)["traceEvents"]
    assert events[1]["name"] == "f"
    assert events[1]["dur"] == 42


def test_profile_without_session_is_dropped(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.write_profile(ProfileResult("lost", 0.0, 1, 1))
    inst.begin_session("s", str(path))
    inst.end_session()
    assert read_trace(path)["traceEvents"] == [{}]


def test_new_session_closes_previous(tmp_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    inst = Instrumentor()
    inst.begin_session("one", str(first))
    inst.write_profile(ProfileResult("a", 0.0, 1, 1))
    inst.begin_session("two", str(second))
    assert [e.get("name") for e in read_trace(first)["traceEvents"]] == [None, "a"]
    assert inst.session_name == "two"
    inst.end_session()
    assert read_trace(second)["traceEvents"] == [{}]


def test_unopenable_path_leaves_no_session(tmp_path):
    path = tmp_path / "missing" / "trace.json"
    inst = Instrumentor()
    inst.begin_session("s", str(path))
    assert inst.session_name is None
    inst.write_profile(ProfileResult("x", 0.0, 1, 1))
    inst.end_session()
    assert not path.exists()


def test_timer_records_scope(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("s", str(path))
    with InstrumentationTimer("scope", instrumentor=inst) as timer:
        pass
    inst.end_session()
    assert timer.stopped
    events = read_trace(path)["traceEvents"]
    assert len(events) == 2
    assert events[1]["name"] == "scope"
    assert events[1]["dur"] >= 0
    assert events[1]["ph"] == "X"


def test_timer_stops_once(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session("s", str(path))
    with InstrumentationTimer("once", instrumentor=inst) as timer:
        timer.stop()
    inst.end_session()
    names = [e.get("name") for e in read_trace(path)["traceEvents"]]
    assert names.count("once") == 1


def test_cleanup_removes_token_and_quotes():
    assert (
        cleanup_output_string('void __cdecl run("x")', "__cdecl ")
        == "void run('x')"
    )


def test_cleanup_without_match_keeps_text():
    text = "Emerald::Application::Run"
    assert cleanup_output_string(text, "__cdecl ") == text


def test_cleanup_back_to_back_removes_first_only():
    assert cleanup_output_string("__cdecl __cdecl f", "__cdecl ") == "__cdecl f"


def test_cleanup_token_at_end():
    assert cleanup_output_string("f __cdecl ", "__cdecl ") == "f "