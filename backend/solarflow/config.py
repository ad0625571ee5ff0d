from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    model_config = {"env_prefix": "SOLARFLOW_", "case_sensitive": False}

    # Oversizing
    annual_sun_days: float = 300.0
    default_irradiance_kwh_per_kwp: float = 1864.0

    # Financial projection
    discount_rate: float = 0.08
    system_life_years: int = 20
    annual_degradation: float = 0.005
    tariff_escalation: float = 0.10

    # IRR solver
    irr_initial_guess: float = 0.10
    irr_max_iterations: int = 100
    irr_tolerance: float = 0.01

    # Presentation
    currency_symbol: str = "R"


settings = EngineSettings()
