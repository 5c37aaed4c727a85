"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Backend API (the service that owns OCR, extraction and the graph)
    api_base_url: str = "http://localhost:8000/api/v1"
    api_token: str | None = None
    api_timeout: float = 30.0
    graph_endpoint: str = "/graph/"

    # Visible node budget
    batch_size: int = 120
    max_visible_nodes: int | None = Field(
        default=None,
        description="Upper bound on rendered nodes, None renders the whole graph"
    )

    # Component layout
    component_spacing: float = 300.0
    min_component_radius: float = 40.0
    radius_per_node: float = 8.0

    # Simulation settle/freeze
    settle_ms_per_element: float = Field(
        default=100.0,
        description="Freeze delay per node+edge, in milliseconds"
    )
    settle_initial_delay: float = 0.1  # seconds before the first engine check
    engine_poll_interval: float = 0.1  # seconds between engine availability checks
    frame_interval: float = 1 / 60

    # Camera fit
    fit_view_delay: float = 1.5
    fit_view_duration_ms: float = 400.0
    fit_view_padding: float = 50.0
    min_zoom: float = 0.2
    max_zoom: float = 4.0
    canvas_width: float = 1280.0
    canvas_height: float = 800.0

    # Force engine (force-graph / d3-force tuning)
    radial_radius: float = 0.004
    radial_strength: float = 0.1
    charge_strength: float = -30.0
    link_distance: float = 30.0
    alpha_decay: float = 0.1
    velocity_decay: float = 0.9
    alpha_min: float = 0.001
    cooldown_ticks: int = 100
    cooldown_time: float = 6.0

    # Interaction
    highlight_timeout: float = Field(
        default=0.9,
        description="Seconds a click highlight stays before returning to idle"
    )
    pulse_interval: float = Field(
        default=0.1,
        description="Seconds between sparkle repaints"
    )

    # Development backend
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False


def get_test_settings() -> Settings:
    """Get test environment settings.

    Timings are shortened so real-loop tests finish quickly.
    """
    return Settings(
        api_base_url="http://testserver",
        api_timeout=1.0,
        settle_initial_delay=0.01,
        engine_poll_interval=0.01,
        fit_view_delay=0.02,
        highlight_timeout=0.05,
        pulse_interval=0.01,
    )


# Global settings instance
settings = Settings()
