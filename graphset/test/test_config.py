import pytest
from pydantic import ValidationError

from graphset.core.Config import GraphSetConfig, DEFAULT_CATALOG
from graphset.core.GraphPrimitives import Point
from graphset.core.SessionController import SessionController
from graphset.core.Types import DropOutcome


class TestGraphSetConfig:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch, tmp_path):
        # no stray GRAPHSET_* variables or .env file from the caller
        monkeypatch.chdir(tmp_path)
        for name in ("HIT_RADIUS", "ZONE_SPACING", "PALETTE_SPACING", "ROOT_LABEL", "ROOT_X"):
            monkeypatch.delenv(f"GRAPHSET_{name}", raising=False)

    def test_defaults(self):
        config = GraphSetConfig()
        assert config.hit_radius == 60
        assert config.zone_spacing == 90
        assert config.root_position == Point(100, 70)
        assert config.catalog == DEFAULT_CATALOG

    def test_origin_for(self):
        config = GraphSetConfig()
        assert config.origin_for(0) == Point(400, 50)
        assert config.origin_for(3) == Point(400, 260)

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("GRAPHSET_HIT_RADIUS", "25")
        monkeypatch.setenv("GRAPHSET_ROOT_LABEL", "Start")
        monkeypatch.setenv("UNRELATED", "x")
        config = GraphSetConfig()
        assert config.hit_radius == 25.0
        assert config.root_label == "Start"
        assert config.zone_spacing == 90

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("GRAPHSET_ZONE_SPACING=120\n")
        assert GraphSetConfig().zone_spacing == 120.0

    def test_frozen(self):
        config = GraphSetConfig()
        with pytest.raises(ValidationError):
            config.hit_radius = 10

    @pytest.mark.parametrize("name, raw", [
        ("GRAPHSET_HIT_RADIUS", "nan"),
        ("GRAPHSET_HIT_RADIUS", "inf"),
        ("GRAPHSET_HIT_RADIUS", "-5"),
        ("GRAPHSET_HIT_RADIUS", "0"),
        ("GRAPHSET_ZONE_SPACING", "far"),
        ("GRAPHSET_PALETTE_SPACING", "-70"),
        ("GRAPHSET_ROOT_X", "nan"),
    ])
    def test_rejects_invalid_values(self, monkeypatch, name, raw):
        monkeypatch.setenv(name, raw)
        with pytest.raises(ValidationError):
            GraphSetConfig()

    def test_rejects_invalid_keyword(self):
        with pytest.raises(ValidationError):
            GraphSetConfig(hit_radius=float("nan"))

    def test_configured_radius_drives_hit_test(self, monkeypatch):
        monkeypatch.setenv("GRAPHSET_HIT_RADIUS", "5")
        controller = SessionController(GraphSetConfig())
        controller.pointer_down("func1", Point(400, 50))
        controller.pointer_move(Point(110, 165))
        assert controller.pointer_up() == DropOutcome.REVERTED

        controller.pointer_down("func1", Point(400, 50))
        controller.pointer_move(Point(100, 160))
        assert controller.pointer_up() == DropOutcome.COMMITTED
