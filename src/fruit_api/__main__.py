"""
Run the service with uvicorn:

    python -m fruit_api
    fruit-api
"""
import uvicorn

from fruit_api.config.settings import get_settings
from fruit_api.main import create_app


def main() -> None:
    settings = get_settings()
    # logging is configured by create_app; keep uvicorn from replacing it
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
