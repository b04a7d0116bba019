"""A dev entrypoint for running Snooflake."""

import os

from snooflake import create_app

app = create_app(os.getenv("ENV", "development"))

if __name__ == "__main__":
    app.run(port=8080, debug=True)
