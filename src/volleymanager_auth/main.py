"""
Command-line entry point for the VolleyManager session client.

Logs in, verifies the session, derives the user and logs out again.
"""

import getpass
import sys
from typing import Optional

from .core import Config, setup_logger, LoggerContext
from .api import AuthAPI
from .identity import derive_user, has_multiple_associations, select_attribute_values
from .models import DerivedUser


class SessionApp:
    """Runs one login / session check / logout cycle."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        self.config = Config(config_file)
        self.logger = setup_logger(log_level=self.config.log_level, log_file=self.config.log_file)
        self.logger.info(f"Configuration: {self.config}")

        self.api_client = AuthAPI(self.config.to_service_config(logger=self.logger))

    def run(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        keep_session: bool = False
    ) -> Optional[DerivedUser]:
        """
        Log in and derive the user.

        Args:
            username: Overrides the configured username
            password: Overrides the configured password
            keep_session: Skip the logout at the end

        Returns:
            The derived user, or None if login or session check failed
        """
        username = username or self.config.auth_username
        password = password or self.config.auth_password
        if not username:
            raise ValueError("A username is required (config, VM_USERNAME or --username)")
        if not password:
            password = getpass.getpass(f"Password for {username}: ")

        with LoggerContext(self.logger, "VolleyManager login"):
            result = self.api_client.login(username, password)

        if not result.success:
            self.logger.error(f"Login failed: {result.error_message}")
            if result.error.unlocks_at is not None:
                self.logger.error(f"Account unlocks at {result.error.unlocks_at.isoformat()}")
            return None

        try:
            session = self.api_client.check_session()
            if not session.valid:
                self.logger.error("Session is not valid after login")
                return None

            derived = derive_user(session.active_party)
            attributes = select_attribute_values(session.active_party)
            self.logger.info(f"User id: {derived.user.id}")
            for occupation in derived.user.occupations:
                marker = "*" if occupation.id == derived.active_occupation_id else " "
                self.logger.info(
                    f" {marker} {occupation.type.value} {occupation.association_code or occupation.id}"
                )
            if has_multiple_associations(attributes):
                self.logger.info("User is a referee in multiple associations")
            return derived

        finally:
            if not keep_session:
                self.api_client.logout()
            self.api_client.close()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="VolleyManager session client"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--username",
        type=str,
        default=None,
        help="VolleyManager username. Default: from configuration"
    )
    parser.add_argument(
        "--keep-session",
        action="store_true",
        help="Do not log out at the end"
    )

    args = parser.parse_args()

    try:
        app = SessionApp(config_file=args.config)
        derived = app.run(username=args.username, keep_session=args.keep_session)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)

    if derived is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
