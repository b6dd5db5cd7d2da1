import logging
import os
from app import app, db
from models.user import User

logger = logging.getLogger("create_admin")

if __name__ == "__main__":
    with app.app_context():
        db.create_all()
        existing_admin = User.query.filter_by(username="admin").first()
        if existing_admin:
            logger.warning("Admin account already exists!")
        else:
            admin = User(
                full_name="Housing Administrator",
                username="admin",
                role="admin"
            )
            admin.set_password(os.getenv("ADMIN_PASSWORD", "admin123"))
            db.session.add(admin)
            db.session.commit()
            logger.info("Admin account created successfully!")
