from flask import Flask, render_template
from werkzeug.exceptions import NotFound as RouteNotFound

from . import auth, seeds
from .auth import auth_bp
from .campgrounds import campgrounds_bp
from .comments import comments_bp
from .config import Config
from .errors import NotFound, PersistenceError
from .logging_config import setup_logging
from .models import db


def create_app(config=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_mapping(Config().as_dict())
    if config:
        app.config.from_mapping(config)

    setup_logging(app.config['LOG_LEVEL'])
    db.init_app(app)

    # ---------------- Routes ----------------
    @app.route('/')
    def landing():
        return render_template('landing.html')

    # ---------------- Blueprints ----------------
    app.register_blueprint(campgrounds_bp)
    app.register_blueprint(comments_bp)
    app.register_blueprint(auth_bp)

    auth.init_app(app)
    seeds.init_app(app)

    # ---------------- Errors ----------------
    @app.errorhandler(NotFound)
    def handle_not_found(e):
        app.logger.info(str(e))
        return render_template('error.html', status=404, message=str(e)), 404

    @app.errorhandler(RouteNotFound)
    def handle_unknown_route(e):
        return render_template('error.html', status=404, message='Page not found'), 404

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e):
        return render_template('error.html', status=500, message='Something went wrong on our side.'), 500

    with app.app_context():
        db.create_all()
        if app.config['SEED_DB']:
            seeds.seed_db()

    return app


def main():
    app = create_app()
    app.logger.info(f"Server started on {app.config['IP']}:{app.config['PORT']}")
    app.run(host=app.config['IP'], port=app.config['PORT'])


if __name__ == '__main__':
    main()
