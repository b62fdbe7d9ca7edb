#!/usr/bin/env python3
"""
ReelScout Startup Script
"""

import shutil
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def generate_env_file():
    """Generate .env file if it doesn't exist"""
    env_path = Path(__file__).parent.parent / ".env"
    env_example = Path(__file__).parent.parent / ".env.example"

    if not env_path.exists():
        if env_example.exists():
            shutil.copyfile(env_example, env_path)
            print("Generated .env file from .env.example, fill in your API keys")
        else:
            print("Warning: .env.example not found, using default configuration")


def main():
    import uvicorn
    from reelscout.config import get_settings

    generate_env_file()
    settings = get_settings()

    if not settings.TMDB_API_KEY:
        print("Warning: TMDB_API_KEY is not set, movie routes will answer 400")

    print(f"""
    ReelScout API:     http://{settings.HOST}:{settings.PORT}/api
     - Documentation:  http://{settings.HOST}:{settings.PORT}/docs
     - Logs:           {settings.LOGS_DIR}

    Press CTRL+C to stop
    """)

    uvicorn.run(
        "reelscout.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level="info",
        access_log=True,
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
