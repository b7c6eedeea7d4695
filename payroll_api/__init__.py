from logging.config import dictConfig

import click
from flask import Flask
from flask_cors import CORS

from payroll_api.config import Config, logging_config
from payroll_api.extensions import db, init_db
from payroll_api.common.errors import register_error_handlers
from payroll_api.models import load_all


def create_app(config_object: str | type | None = None):
    app = Flask(__name__, static_folder="static", static_url_path="")

    app.config.from_object(Config)
    # Optional override (import path or class); keep defaults if it is missing
    if config_object:
        try:
            app.config.from_object(config_object)
        except ImportError as e:
            app.logger.warning("Could not import config object %r: %s", config_object, e)

    dictConfig(logging_config(app.config["LOG_LEVEL"]))
    # employee objects keep their documented field order
    app.json.sort_keys = False

    # CORS for the JSON API only
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # Extensions
    init_db(app)
    register_error_handlers(app)

    # Ensure models are loaded so metadata is complete
    with app.app_context():
        load_all()

    # Blueprints
    from payroll_api.blueprints.employees import bp as employees_bp
    from payroll_api.blueprints.frontend import bp as frontend_bp

    app.register_blueprint(employees_bp)
    app.register_blueprint(frontend_bp)

    # ----------------- CLI COMMANDS -----------------

    @app.cli.command("console")
    def console_command():
        """Interactive employee payroll menu."""
        from payroll_api.console import PayrollConsole
        from payroll_api.services.employee_gateway import EmployeeGateway

        PayrollConsole(EmployeeGateway(db.session)).run()

    @app.cli.command("init-db")
    def init_db_command():
        """Create the employee table (use `flask db upgrade` for managed schemas)."""
        db.create_all()
        click.echo("Created tables: " + ", ".join(sorted(db.metadata.tables)))

    @app.cli.command("seed-demo")
    def seed_demo():
        """Insert a few demo employees."""
        from payroll_api.models.employee import Employee
        from payroll_api.services.employee_gateway import EmployeeGateway

        gw = EmployeeGateway(db.session)
        demo = (
            ("Asha Rao", "Engineer", "52000", "12000", "4000", "3500"),
            ("Vikram Shah", "Accountant", "38000", "9000", "3000", "2200"),
            ("Meera Iyer", "HR Executive", "34000", "8000", "2500", "1800"),
        )
        for name, designation, basic, hra, da, deductions in demo:
            emp = gw.create(Employee(name=name, designation=designation, basic_salary=basic,
                                     hra=hra, da=da, deductions=deductions))
            click.echo(f"Seeded employee {emp.id}: {emp.name}")

    return app
