from flask import Flask, jsonify
from dotenv import load_dotenv
import logging
import os
from extensions import db, migrate, login_manager
from errors import register_error_handlers

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Setup Flask
load_dotenv()


def configure_logging(level):
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))


def create_app(test_config=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.getenv("SECRET_KEY", "secret_key")
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv("DATABASE_URL", "sqlite:///housing.db")
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET'] = os.getenv("JWT_SECRET", app.config['SECRET_KEY'])
    app.config['JWT_ALGORITHM'] = os.getenv("JWT_ALGORITHM", "HS256")
    app.config['JWT_EXPIRES_IN'] = int(os.getenv("JWT_EXPIRES_IN", "86400"))
    app.config['LOG_LEVEL'] = os.getenv("LOG_LEVEL", "INFO").upper()

    # Lưu & upload ảnh đại diện sinh viên
    app.config['UPLOAD_FOLDER_PHOTOS'] = os.getenv(
        "UPLOAD_FOLDER_PHOTOS", os.path.join(app.root_path, "static", "uploads", "photos")
    )
    app.config['ALLOWED_EXTENSIONS'] = {"png", "jpg", "jpeg", "gif", "webp"}
    app.config['MAX_CONTENT_LENGTH'] = 5 * 1024 * 1024  # 5MB/file

    if test_config:
        app.config.update(test_config)

    # Pool kết nối (chỉ áp dụng cho server DB, SQLite không có pool_size)
    if 'SQLALCHEMY_ENGINE_OPTIONS' not in app.config:
        engine_options = {"pool_pre_ping": True}
        if not app.config['SQLALCHEMY_DATABASE_URI'].startswith("sqlite"):
            engine_options["pool_size"] = int(os.getenv("DB_POOL_SIZE", "10"))
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = engine_options

    configure_logging(app.config['LOG_LEVEL'])

    # Khởi tạo db, migrate, login
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Import models sau khi db đã init
    import models  # noqa: F401
    import security  # noqa: F401  (đăng ký request_loader)

    # Import blueprints
    from blueprints.student.routes import student_bp
    app.register_blueprint(student_bp, url_prefix="/student")

    from blueprints.services.routes import services_bp
    app.register_blueprint(services_bp, url_prefix="/services")

    from blueprints.activities.routes import activities_bp
    app.register_blueprint(activities_bp, url_prefix="/activities")

    from blueprints.announcements.routes import announcements_bp
    app.register_blueprint(announcements_bp, url_prefix="/announcements")

    register_error_handlers(app)

    @app.route("/")
    def home():
        return jsonify({"success": True, "message": "Welcome to Student Housing API"})

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
