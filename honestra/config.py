"""
Honestra Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Text-generation collaborator ---
    LLM_PROVIDER: str = os.getenv("HONESTRA_LLM_PROVIDER", "gemini")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    SUMMARY_TIMEOUT: float = float(os.getenv("HONESTRA_SUMMARY_TIMEOUT", "8.0"))

    # --- Rewriter ---
    # "category" applies only the detected category's rules,
    # "cascade" applies the whole catalog (legacy behaviour).
    REWRITE_MODE: str = os.getenv("HONESTRA_REWRITE_MODE", "category")

    # --- Policy thresholds ---
    POLICY_MIN_SCORE: float = float(os.getenv("HONESTRA_POLICY_MIN_SCORE", "0.2"))
    POLICY_HIGH_RISK_SCORE: float = float(
        os.getenv("HONESTRA_POLICY_HIGH_RISK_SCORE", "0.7")
    )
    POLICY_REFINED_TYPES: bool = os.getenv("HONESTRA_POLICY_REFINED_TYPES", "").lower() in ("1", "true", "yes")

    # --- Guard log (input for the labeling tool) ---
    GUARD_LOG_PATH: str = os.getenv("HONESTRA_GUARD_LOG", "")

    # --- Server ---
    HOST: str = os.getenv("HONESTRA_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("HONESTRA_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("HONESTRA_CORS_ORIGINS", "*")

    @property
    def summaries_enabled(self) -> bool:
        return self.LLM_PROVIDER == "gemini" and bool(self.GEMINI_API_KEY)


settings = Settings()
