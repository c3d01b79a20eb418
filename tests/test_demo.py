import demo
from registry_config import RegistryConfig


def test_checkbox_scenario():
    boxes = demo.run_checkbox(RegistryConfig())
    assert boxes[0].checked is True
    assert [cb.checked for cb in boxes[1:]] == [False, False]


def test_mailbox_scenario(capsys):
    assert demo.run_mailbox(RegistryConfig()) == 1
    out = capsys.readouterr().out
    assert "hello@google.com" in out
    assert "После отписки доставлено: False" in out


def test_model_scenario():
    rendered = demo.run_model(RegistryConfig())
    assert len(rendered) == 2
    assert "Sunset" in rendered[0]


def test_main_with_config(tmp_path, capsys):
    p = tmp_path / "cfg.yaml"
    p.write_text("isolate_failures: true\n", encoding="utf-8")
    assert demo.main(["--scenario", "all", "--config", str(p)]) == 0
    out = capsys.readouterr().out
    for name in ("checkbox", "mailbox", "model"):
        assert f"==== {name} ====" in out
