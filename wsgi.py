"""WSGI entry point (also used by `flask --app wsgi ...` commands)."""
import os

from app import create_app

# Create Flask application instance
app = create_app(os.getenv("FLASK_ENV", "development"))

# Run the app
if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
