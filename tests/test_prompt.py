from aish.prompt import SENTINEL, build_initial_prompt, build_system_prompt


def test_system_prompt_embeds_environment_verbatim():
    prompt = build_system_prompt("Debian 12 (bookworm)", "svc_backup", "db-07.internal")
    assert "Debian 12 (bookworm)" in prompt
    assert "svc_backup" in prompt
    assert "db-07.internal" in prompt
    assert SENTINEL in prompt


def test_system_prompt_changes_with_environment():
    first = build_system_prompt("ubuntu", "alice", "web01")
    second = build_system_prompt("alpine", "bob", "edge")
    assert first != second
    assert "alice" not in second


def test_initial_prompt_for_regular_user():
    assert build_initial_prompt("alice", "web01") == "alice@web01:~$"


def test_initial_prompt_for_root():
    assert build_initial_prompt("root", "server") == "root@server:~#"
