#!/usr/bin/env python3
"""
Application startup script with environment configuration support.
"""

import os
import sys
import argparse

from heritage_map.config.loader import ConfigLoader, load_config_for_environment
from heritage_map.config.settings import reload_settings


def main():
    """Main startup function with environment configuration"""
    parser = argparse.ArgumentParser(description="Heritage Map Backend Server")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument("--host", default=None, help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (overrides config)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (overrides config)"
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (overrides config)")
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="List available environment configurations"
    )
    parser.add_argument("--validate-env", help="Validate a specific environment configuration")
    parser.add_argument("--create-sample", help="Create a sample .env file for the specified environment")

    args = parser.parse_args()

    if args.list_envs:
        print("Available environment configurations:")
        for env in ConfigLoader.get_available_environments():
            print(f"  - {env}")
        return

    if args.validate_env:
        if ConfigLoader.validate_environment_config(args.validate_env):
            print(f"✓ Environment '{args.validate_env}' configuration is valid")
        else:
            print(f"✗ Environment '{args.validate_env}' configuration is invalid or missing")
            sys.exit(1)
        return

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
        except (ValueError, OSError) as e:
            print(f"✗ Failed to create sample configuration: {e}")
            sys.exit(1)
        print(f"✓ Sample configuration created: {sample_file}")
        return

    try:
        settings = load_config_for_environment(args.env)
    except ValueError as e:
        print(f"✗ Failed to load configuration: {e}")
        sys.exit(1)
    print(f"✓ Loaded configuration for environment: {settings.environment.value}")

    # the app (and any reload or worker process) reads settings through get_settings()
    os.environ["ENVIRONMENT"] = settings.environment.value
    reload_settings()

    host = args.host or settings.host
    port = args.port or settings.port
    workers = args.workers or settings.workers
    reload = args.reload or settings.reload

    if workers > 1:
        # tour sessions and their timers live in process memory
        print("⚠ Tour sessions are per-process; run a single worker or use sticky sessions")

    print(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {host}")
    print(f"   Port: {port}")
    print(f"   Workers: {workers}")
    print(f"   Reload: {reload}")
    print(f"   Log Level: {settings.log_level.value}")
    print(f"   Tour interval: {settings.tour.interval_seconds}s")

    import uvicorn

    uvicorn.run(
        "heritage_map.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if not reload else 1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
