from __future__ import annotations

import logging

from flask import Flask

from tiebreaker_web.adapters.llm_gemini import GeminiClient
from tiebreaker_web.config.ini_config import AppSettings, IniConfig
from tiebreaker_web.services.analysis_service import AnalysisService
from tiebreaker_web.web.routes import create_blueprint

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def create_app(settings: AppSettings | None = None, analysis_service: AnalysisService | None = None) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    configure_logging(settings.log_level)

    if analysis_service is None:
        llm = GeminiClient(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            temperature=settings.gemini_temperature,
            timeout_seconds=settings.gemini_timeout_seconds,
        )
        analysis_service = AnalysisService(llm=llm)

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(analysis_service, settings))

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    app.logger.info("Tiebreaker ready (model=%s, default mode=%s)", settings.gemini_model, settings.default_mode.value)

    return app
