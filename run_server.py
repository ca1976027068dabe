import logging

import uvicorn

from wordmap.config import load_config

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    config = load_config()

    print("Starting Word Genetic Map API Server...")
    print(f"Docs available at: http://localhost:{config.port}/docs")

    uvicorn.run(
        "wordmap.api.server:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=config.is_development
    )
