"""
Usage Examples for the Attendance SDK
Demonstrates configuration and the business calls
"""

import sys
from datetime import date, timedelta

from attendance_sdk import (
    AttendanceClient,
    AttendanceError,
    BootstrapError,
    ClientConfig,
    ConfigLoader,
    ConfigValidator,
)


# =============================================================================
# Example 1: Programmatic Configuration
# =============================================================================

def programmatic_config_example() -> ClientConfig:
    """Configure the SDK programmatically with all options"""
    loader = ConfigLoader()

    return loader.load(
        env=False,
        config={
            # Required credentials
            "username": "staff@school.example",
            "password": "your-password",

            # Service location
            "config_url": "https://config.your-district.example/runtime-config.json",
            "tenant_api_path": "api",

            # Transport
            "timeout": 30000,
            "rate_limit_margin": 3,

            # Diagnostics
            "debug": True,
            "enable_audit_log": False,
        },
    )


# =============================================================================
# Example 2: Environment Configuration
# =============================================================================

def environment_config_example() -> ClientConfig:
    """
    Load configuration from environment variables

    Set before running:
        export ATTENDANCE_USERNAME="staff@school.example"
        export ATTENDANCE_PASSWORD="your-password"
        export ATTENDANCE_DEBUG="true"
    """
    return ConfigLoader().load()


# =============================================================================
# Example 3: Validation Without Loading
# =============================================================================

def validation_example() -> None:
    """Validate a configuration dictionary and print the problems"""
    result = ConfigValidator().validate({
        "username": "not-an-email",
        "timeout": 10,
    })

    if not result.valid:
        for error in result.errors:
            print(f"  {error.field}: {error.message}")


# =============================================================================
# Example 4: Business Calls
# =============================================================================

def business_calls_example(config: ClientConfig) -> None:
    """Bootstrap a session and run the business calls"""
    try:
        client = AttendanceClient(config)
    except BootstrapError as e:
        print(f"Login failed at step {e.step}: {e.get_description()}")
        return

    with client:
        try:
            print(client.get_attendance_info())

            activities = client.get_activities()
            print(f"{len(activities)} activities")

            today = date.today()
            report = client.activity_attendance_report(
                activity_ids=[a["id"] for a in activities],
                site_prefix="MAIN",
                from_date=today - timedelta(days=7),
                to_date=today,
                grade_ids=[1, 2, 3],
            )
            print(report)
        except AttendanceError as e:
            print(f"Request failed: {e.get_description()}")


if __name__ == "__main__":
    print("Validation example:")
    validation_example()

    if len(sys.argv) > 1 and sys.argv[1] == "--live":
        business_calls_example(environment_config_example())
