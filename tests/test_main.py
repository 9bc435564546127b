"""Tests for main module."""

import photo_editor.main as main_module


def test_main_runs_uvicorn_on_configured_port(monkeypatch, settings) -> None:
    calls: list[tuple[str, dict[str, object]]] = []

    def fake_run(app: str, **kwargs: object) -> None:
        calls.append((app, kwargs))

    settings = settings.model_copy(update={"port": 8123, "environment": "production"})
    monkeypatch.setattr(main_module, "Settings", lambda: settings)
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert calls == [
        (
            "photo_editor.api.asgi:app",
            {"host": "0.0.0.0", "port": 8123, "reload": False},  # noqa: S104
        )
    ]
