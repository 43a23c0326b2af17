"""
API Server Runner

Entry point for running the assistant's FastAPI server with environment
setup, ``.env`` loading and directory preparation.
"""

import argparse
import logging
import os
import sys
import traceback
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("api_runner")


def parse_arguments():
    """Parse command line arguments for the API server."""
    parser = argparse.ArgumentParser(description="Run the Atom Mail Assistant API server")

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind the server to (default: 8000)"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    parser.add_argument(
        "--env",
        type=str,
        choices=["development", "testing", "production"],
        default="development",
        help="Environment to run in (default: development)"
    )

    return parser.parse_args()


def setup_environment(env: str) -> None:
    """Load ``.env``, set the runtime environment and create the storage directory."""
    load_dotenv()
    os.environ["ENVIRONMENT"] = env

    storage_path = Path(os.getenv("STORAGE_PATH", "data/extension_storage.json"))
    storage_path.parent.mkdir(parents=True, exist_ok=True)

    if not os.getenv("OPENAI_API_KEY"):
        logger.warning("OPENAI_API_KEY is not set; analysis requests will fail")
    if env == "production" and not os.getenv("ENCRYPTION_KEY"):
        logger.error("ENCRYPTION_KEY must be set in production")


def main():
    args = parse_arguments()
    setup_environment(args.env)

    logger.info(f"Starting API server in {args.env} mode")
    logger.info(f"Server will be available at http://{args.host}:{args.port}")

    if args.env == "development":
        logger.info(f"API documentation will be available at http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "api.main:create_application",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info" if args.env == "production" else "debug"
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error running server: {str(e)}")
        logger.error(traceback.format_exc())
        sys.exit(1)
