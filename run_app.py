#!/usr/bin/env python3
"""
VERM Airdrop Backend Runner
===========================

Run the airdrop registration API in different modes.

Usage:
    python run_app.py                    # Development mode with auto-reload
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import os
import sys

def check_environment():
    """Report on the local environment"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, using defaults")

    if os.environ.get("DATABASE_URL"):
        print("✅ DATABASE_URL set")
    else:
        print("⚠️  DATABASE_URL not set, using local SQLite database")

def run_app(host="0.0.0.0", port=8000, reload=True, workers=1):
    """Run the FastAPI application"""
    print(f"\n🚀 Starting Airdrop API on {host}:{port}")
    print(f"📖 API Docs: http://{host}:{port}/api/docs")
    print("\n" + "=" * 50)

    import uvicorn
    from airdrop.core.config import get_settings

    if not reload:
        allowed = get_settings().worker_count(workers)
        if allowed != workers:
            print(f"⚠️  Rate limiting is process-local, running {allowed} worker instead of {workers}")
        workers = allowed

    uvicorn.run(
        "airdrop.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level="info"
    )

def main():
    parser = argparse.ArgumentParser(
        description="VERM Airdrop Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes in prod mode (default: 1, forced to 1 while rate limiting is enabled)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")

    args = parser.parse_args()

    check_environment()

    if args.mode == "prod":
        os.environ.setdefault("ENVIRONMENT", "production")

    reload = not args.no_reload and args.mode != "prod"
    run_app(args.host, args.port, reload, args.workers)
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")
        sys.exit(0)
