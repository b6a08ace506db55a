import streamsphere.__main__ as entrypoint


def test_main_serves_the_app(monkeypatch):
    calls = []
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    entrypoint.main()

    assert calls == [(("streamsphere.main:app",), {"host": "127.0.0.1", "port": 8000})]
