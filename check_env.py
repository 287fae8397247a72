#!/usr/bin/env python3
"""Helper script to check and create .env file for the fleet route backend."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Supabase Configuration (Required for route storage)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
FLEET_SUPABASE_URL=https://your-project-id.supabase.co
FLEET_SUPABASE_KEY=your-service-role-key-here

# API Configuration
FLEET_API_PREFIX=/api
# FLEET_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Optimizer assumptions (fleet averages)
FLEET_AVERAGE_SPEED_MPH=45
FLEET_AVG_MPG=7.0
FLEET_COST_PER_GALLON=3.45
FLEET_STRICT_COORDINATES=false

# Run outputs
FLEET_DATA_ROOT=./data
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 20 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Fleet Route Optimizer Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("FLEET_SUPABASE_KEY="):
            name, value = line.split("=", 1)
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print("-" * 60)
    print()

    for name in ("FLEET_SUPABASE_URL", "FLEET_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {value[:20]}...")
        else:
            print(f"❌ {name} not found in environment")
    print()

    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from fleetroute.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(
        f"Optimizer assumptions: {settings.average_speed_mph} mph, "
        f"{settings.avg_mpg} mpg, ${settings.cost_per_gallon}/gal, strict={settings.strict_coordinates}"
    )
    if settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured!")
    else:
        print("❌ ERROR: Supabase is NOT configured")
        print("Make sure variables start with the FLEET_ prefix and restart the backend after editing .env")


if __name__ == "__main__":
    main()
