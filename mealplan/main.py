import logging

import uvicorn
from mealplan.api.api_run import app
from mealplan.utilities.config import APP_HOST, APP_PORT, DEBUG
from mealplan.utilities.network import server_urls


def main():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    local_url, *lan_urls = server_urls(APP_PORT)
    print(f"Uvicorn running on {local_url} (Press CTRL+C to quit)")
    for url in lan_urls:
        # Point the mobile app's PLAN_API_BASE_URL here
        print(f"Accessible from other devices at: {url}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    main()
