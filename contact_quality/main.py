from contact_quality.config.settings import Settings
from contact_quality.logging.logger import Log
from contact_quality.web.app import create_app


def main() -> None:
    """Entry point: load settings -> build the web app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(
        f"Serving contact quality checker on http://{settings.web_host}:{settings.web_port} "
        f"(provider={settings.analysis_provider})"
    )
    app.run(host=settings.web_host, port=settings.web_port, debug=settings.app_env == "dev")


if __name__ == "__main__":
    main()
