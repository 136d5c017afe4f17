import os

from riddlebox import create_app

app = create_app(os.getenv("FLASK_CONFIG"))

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 5000)))
