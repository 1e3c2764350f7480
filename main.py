"""Simple entrypoint to run the Polish Muse server locally."""

import uvicorn

from polish_app.config import PolishConfig


def main() -> None:
    config = PolishConfig.from_env()
    print(f"Gemini proxy running on http://localhost:{config.port}")
    uvicorn.run("server.api:app", host="0.0.0.0", port=config.port, reload=False)


if __name__ == "__main__":
    main()
