# payroll_api/wsgi.py
from payroll_api import create_app
from payroll_api.extensions import dispose_engine

app = create_app()


def main():
    """`payroll-server` entry point: threaded dev server on $PORT."""
    port = app.config["PORT"]
    app.logger.info("Server started on http://localhost:%s", port)
    try:
        app.run(host="0.0.0.0", port=port, threaded=True)
    finally:
        dispose_engine(app)


if __name__ == "__main__":
    main()
