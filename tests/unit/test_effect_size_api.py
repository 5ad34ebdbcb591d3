"""Tests for the effect size service and HTTP routes."""

import pytest
from fastapi.testclient import TestClient

from cles_engine.config import Settings, settings
from cles_engine.main import create_app
from cles_engine.services.effect_size_service import compute_curves, compute_metrics, render_chart
from cles_engine.stats import InvalidInput, translate


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app())


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("CLES_N_POINTS", raising=False)
        s = Settings(_env_file=None)
        assert s.n_points == 20000
        assert s.default_sd == 1.0
        assert s.grid_span_sd == 3.0

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("CLES_N_POINTS", "500")
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        s = Settings(_env_file=None)
        assert s.n_points == 500
        assert s.log_level == "DEBUG"

    def test_max_points_never_below_default(self, monkeypatch) -> None:
        monkeypatch.setenv("CLES_N_POINTS", "5000")
        monkeypatch.setenv("CLES_MAX_POINTS", "100")
        assert Settings(_env_file=None).max_points == 5000


class TestService:
    def test_metrics_payload(self) -> None:
        out = compute_metrics(-0.6)
        assert out["metrics"] == translate(-0.6).as_dict()
        assert out["magnitude"] == "medium"
        assert out["direction"] == "negative"

    def test_curves_stride_keeps_endpoints(self) -> None:
        out = compute_curves(0.5, 1.0, n_points=101, stride=7)
        assert out["x"][0] == pytest.approx(-3.0)
        assert out["x"][-1] == pytest.approx(3.5)
        assert len(out["x"]) == len(out["control"]) == len(out["treatment"]) == len(out["overlap"])
        region = out["superiority_region"]
        assert region["y"][0] == 0.0 and region["y"][-1] == 0.0
        assert region["x"][-1] == 0.0

    def test_stride_does_not_change_area(self) -> None:
        full = compute_curves(0.5, 1.0, n_points=1001, stride=1)
        thin = compute_curves(0.5, 1.0, n_points=1001, stride=50)
        assert full["overlap_area"] == thin["overlap_area"]

    def test_points_over_cap_rejected(self) -> None:
        with pytest.raises(InvalidInput):
            compute_curves(0.5, 1.0, n_points=settings.max_points + 1)

    def test_unknown_chart_kind(self) -> None:
        with pytest.raises(KeyError):
            render_chart("violin", 0.5, 1.0, 100)


class TestRoutes:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True

    def test_metrics(self, client: TestClient) -> None:
        resp = client.post("/effect-size/metrics", json={"effect_size": -0.25})
        assert resp.status_code == 200
        body = resp.json()
        assert body["metrics"]["u3"] == pytest.approx(0.5987, abs=1e-4)
        assert body["magnitude"] == "small"
        assert body["direction"] == "negative"

    def test_metrics_missing_field(self, client: TestClient) -> None:
        assert client.post("/effect-size/metrics", json={}).status_code == 422

    def test_curves(self, client: TestClient) -> None:
        resp = client.post(
            "/effect-size/curves",
            json={"effect_size": 0.8, "sd": 1.0, "n_points": 400, "stride": 4},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["n_points"] == 400
        assert body["treatment_mean"] == pytest.approx(0.8)
        assert all(x <= 0.0 for x in body["superiority_region"]["x"])

    def test_curves_non_positive_sd(self, client: TestClient) -> None:
        resp = client.post("/effect-size/curves", json={"effect_size": 0.8, "sd": 0})
        assert resp.status_code == 422

    def test_curves_over_cap(self, client: TestClient) -> None:
        resp = client.post(
            "/effect-size/curves",
            json={"effect_size": 0.8, "n_points": settings.max_points + 1},
        )
        assert resp.status_code == 400
        assert "n_points" in resp.json()["detail"]

    @pytest.mark.parametrize("kind", ["overlap", "superiority"])
    def test_chart_png(self, client: TestClient, kind: str) -> None:
        resp = client.get(f"/effect-size/charts/{kind}.png", params={"effect_size": 0.5, "n_points": 200})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content.startswith(b"\x89PNG")

    def test_unknown_chart(self, client: TestClient) -> None:
        resp = client.get("/effect-size/charts/violin.png", params={"effect_size": 0.5})
        assert resp.status_code == 404

    def test_metrics_non_finite_effect_size(self, client: TestClient) -> None:
        resp = client.post(
            "/effect-size/metrics",
            content='{"effect_size": Infinity}',
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 400
        assert "effect_size" in resp.json()["detail"]

    @pytest.mark.parametrize("kind", ["overlap", "superiority"])
    def test_chart_non_finite_effect_size(self, client: TestClient, kind: str) -> None:
        resp = client.get(f"/effect-size/charts/{kind}.png", params={"effect_size": "inf"})
        assert resp.status_code == 400

    def test_curves_overflowing_bounds(self, client: TestClient) -> None:
        resp = client.post(
            "/effect-size/curves",
            json={"effect_size": 1e308, "sd": 1e308, "n_points": 5},
        )
        assert resp.status_code == 400
        assert "overflow" in resp.json()["detail"]


class TestGridSpanConsistency:
    def test_chart_uses_configured_span(self, monkeypatch) -> None:
        import cles_engine.services.effect_size_service as service

        monkeypatch.setattr(settings, "grid_span_sd", 1.0)
        captured = {}

        def capture(fig, dpi=None):
            captured["fig"] = fig
            return b""

        monkeypatch.setattr(service, "figure_to_png", capture)

        curves = compute_curves(0.5, 1.0, n_points=101)
        for kind in ("overlap", "superiority"):
            render_chart(kind, 0.5, 1.0, 101)
            ax = captured["fig"].axes[0]
            control = next(line for line in ax.get_lines() if line.get_label() == "Control")
            xdata = control.get_xdata()
            assert xdata[0] == pytest.approx(curves["x"][0])
            assert xdata[-1] == pytest.approx(curves["x"][-1])
        assert curves["x"][0] == pytest.approx(-1.0)


class TestLogging:
    def test_level_read_when_app_is_created(self, monkeypatch) -> None:
        import cles_engine.main as main

        calls = []
        monkeypatch.setattr(settings, "log_level", "DEBUG")
        monkeypatch.setattr(main.logging, "basicConfig", lambda **kw: calls.append(kw))
        main.create_app()
        assert calls[-1]["level"] == "DEBUG"
