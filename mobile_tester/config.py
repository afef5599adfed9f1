"""
Configuration settings for the Mobile Tester
"""
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class SessionConfig(BaseModel):
    """Parameters used to negotiate one Appium session."""

    server_url: str
    platform_name: str
    device_name: str
    platform_version: str
    app_package: str
    app_activity: str
    automation_name: str
    no_reset: bool = False
    auto_grant_permissions: bool = True
    implicit_wait: float = 15

    class Config:
        frozen = True

    def capabilities(self) -> Dict[str, Any]:
        """Render the W3C capability dictionary sent to the server."""
        return {
            "platformName": self.platform_name,
            "appium:deviceName": self.device_name,
            "appium:platformVersion": self.platform_version,
            "appium:appPackage": self.app_package,
            "appium:appActivity": self.app_activity,
            "appium:automationName": self.automation_name,
            "appium:noReset": self.no_reset,
            "appium:autoGrantPermissions": self.auto_grant_permissions,
        }


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Mobile Tester"
    DEBUG: bool = False

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent
    ARTIFACTS_DIR: Path = BASE_DIR / "artifacts"
    REPORTS_DIR: Path = BASE_DIR / "reports"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # Appium session
    APPIUM_SERVER_URL: str = "http://127.0.0.1:4723/wd/hub"
    PLATFORM_NAME: str = "Android"
    DEVICE_NAME: str = "emulator-5554"
    PLATFORM_VERSION: str = "16"
    APP_PACKAGE: str = "com.raising.prodigy"
    APP_ACTIVITY: str = "com.raising.prodigy.MainActivity"
    AUTOMATION_NAME: str = "UiAutomator2"
    NO_RESET: bool = False
    AUTO_GRANT_PERMISSIONS: bool = True
    IMPLICIT_WAIT: float = 15  # seconds

    # Explicit waits
    EXPLICIT_WAIT: float = 20  # seconds
    HOME_WAIT: float = 10  # seconds
    WAIT_POLL_INTERVAL: float = 0.5

    # Lifecycle
    CLOSE_ON_TEARDOWN: bool = False
    ADB_PATH: str = "adb"
    ADB_SERIAL: Optional[str] = None
    FORCE_STOP_DELAY: float = 2
    CLEAR_DATA_DELAY: float = 3
    RESET_PERMISSIONS_DELAY: float = 2
    TEARDOWN_SETTLE_DELAY: float = 3
    POST_RESET_DELAY: float = 2
    SUBMIT_SETTLE_DELAY: float = 3

    # Scenario input data
    VALID_EMAIL: str = "program1@prodigy.baby"
    VALID_PASSWORD: str = "123456"
    INVALID_EMAIL: str = "invalid@email.com"
    INVALID_PASSWORD: str = "wrongpassword"

    # Artifacts
    CAPTURE_ARTIFACTS_ON_FAILURE: bool = True

    class Config:
        env_file = ".env"
        extra = "allow"

    def session_config(self) -> SessionConfig:
        """Build the session parameters handed to the lifecycle controller."""
        return SessionConfig(
            server_url=self.APPIUM_SERVER_URL,
            platform_name=self.PLATFORM_NAME,
            device_name=self.DEVICE_NAME,
            platform_version=self.PLATFORM_VERSION,
            app_package=self.APP_PACKAGE,
            app_activity=self.APP_ACTIVITY,
            automation_name=self.AUTOMATION_NAME,
            no_reset=self.NO_RESET,
            auto_grant_permissions=self.AUTO_GRANT_PERMISSIONS,
            implicit_wait=self.IMPLICIT_WAIT,
        )

    def ensure_dirs(self):
        """Create the output directories if they are missing."""
        for directory in (self.ARTIFACTS_DIR, self.REPORTS_DIR, self.LOGS_DIR):
            directory.mkdir(parents=True, exist_ok=True)


settings = Settings()

# Ensure directories exist
settings.ensure_dirs()
