import requests

DEFAULT_ROBOT_NAME = "Nordo Service"
NOTIFY_TIMEOUT_SECONDS = 5.0


class MontroyashiNotifier:
    """
    Announces what the service is doing to Montroyashi.

    Messages are always printed. When `url` is set they are also POSTed as
    JSON ({"robot": ..., "message": ...}); delivery failures are reported
    and otherwise ignored so a missing Montroyashi never breaks boiling.
    """

    def __init__(self, robot_name: str = DEFAULT_ROBOT_NAME, url: str | None = None):
        self.robot_name = robot_name
        self.url = url

    def notify(self, message: str) -> bool:
        """Returns True when the message was delivered (or no URL is configured)."""
        print(f"Message From {self.robot_name}: {message}")
        if not self.url:
            return True

        try:
            response = requests.post(
                self.url,
                json={"robot": self.robot_name, "message": message},
                timeout=NOTIFY_TIMEOUT_SECONDS,
            )
        except requests.exceptions.RequestException as e:
            print(f"[error] Failed to notify Montroyashi: {e}")
            return False

        if response.status_code != 200:
            print(f"[error] Montroyashi returned status {response.status_code} with response: {response.text.strip()}")
            return False
        return True
