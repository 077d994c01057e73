# pawhome/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials, firestore

# - 설정 및 인증
from pawhome.core.config import config_by_name
from pawhome.core.errors import error_response, validation_error_response
from pawhome.core.security import register_jwt_handlers

# - API 블루프린트
from pawhome.api.auth.routes import auth_bp
from pawhome.api.pets.routes import pets_bp
from pawhome.api.shelters.routes import shelters_bp
from pawhome.api.medical.routes import medical_bp
from pawhome.api.volunteers.routes import volunteers_bp
from pawhome.api.donations.routes import donations_bp
from pawhome.api.payments.routes import payments_bp
from pawhome.api.admin.routes import admin_bp

# - 서비스 모듈
from pawhome.api.auth.services import AuthService
from pawhome.api.shelters.services import ShelterService
from pawhome.api.pets.services import PetService
from pawhome.api.volunteers.services import VolunteerService
from pawhome.api.donations.services import DonationService
from pawhome.api.medical.services import MedicalRecordService
from pawhome.services.google_auth_service import GoogleAuthService
from pawhome.services.payment_service import create_payment_gateway


def _init_firestore(app: Flask):
    """서비스 계정 인증서로 Firebase 앱을 초기화하고 Firestore 클라이언트를 반환합니다."""
    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        firebase_admin.initialize_app(credentials.Certificate(cred_path))
    return firestore.client()


def create_app(config_name: str = None, db=None):
    """
    Flask 애플리케이션 팩토리 함수.
    db를 전달하면 Firebase 초기화를 건너뛰고 해당 클라이언트를 모든 서비스에 주입합니다 (테스트용).
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("JWT_SECRET_KEY environment variable is not set.")

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    jwt = JWTManager(app)
    register_jwt_handlers(jwt)

    if db is None:
        db = _init_firestore(app)

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 외부 연동 서비스
    app.services['payments'] = create_payment_gateway(app.config)
    app.services['google_auth'] = GoogleAuthService(
        client_id=app.config['GOOGLE_CLIENT_ID'],
        client_secrets_path=app.config['GOOGLE_CLIENT_SECRETS_PATH'],
        redirect_uri=app.config['GOOGLE_OAUTH_REDIRECT_URI']
    )

    # 5-2. 다른 서비스의 기반이 되는 도메인 서비스
    app.services['auth'] = AuthService(db=db)
    app.services['shelters'] = ShelterService(db=db)
    app.services['donations'] = DonationService(db=db)

    # 5-3. 다른 서비스를 주입받아야 하는 도메인 서비스
    app.services['pets'] = PetService(shelter_service=app.services['shelters'], db=db)
    app.services['volunteers'] = VolunteerService(shelter_service=app.services['shelters'], db=db)
    app.services['medical'] = MedicalRecordService(pet_service=app.services['pets'], db=db)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(pets_bp, url_prefix='/api/pets')
    app.register_blueprint(shelters_bp, url_prefix='/api/shelters')
    app.register_blueprint(medical_bp, url_prefix='/api/medical')
    app.register_blueprint(volunteers_bp, url_prefix='/api/volunteers')
    app.register_blueprint(donations_bp, url_prefix='/api/donations')
    app.register_blueprint(payments_bp, url_prefix='/api/payments')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    @app.route('/')
    def health():
        return "Pet adoption API is running"

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        return validation_error_response(err, "Invalid request data")

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return error_response(err.name.upper().replace(' ', '_'), err.description, err.code)

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "Server error", 500)

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
