# pawhome/core/config.py

import os
from datetime import timedelta


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 서명 키. 토큰 위변조 방지를 위해 반드시 환경 변수로 주입합니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    # 토큰 갱신/폐기 기능이 없으므로 만료 시간이 유일한 무효화 수단입니다.
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)

    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

    # Google 로그인 검증에 사용하는 설정
    GOOGLE_CLIENT_ID = os.getenv('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRETS_PATH = os.getenv('GOOGLE_CLIENT_SECRETS_PATH')
    GOOGLE_OAUTH_REDIRECT_URI = os.getenv('GOOGLE_OAUTH_REDIRECT_URI', 'postmessage')

    # 결제 설정. 데모 모드에서는 외부 결제사와 통신하지 않습니다.
    PAYMENT_DEMO_MODE = _env_flag('PAYMENT_DEMO_MODE', 'true')
    PAYMENT_KEY_ID = os.getenv('PAYMENT_KEY_ID', 'rzp_test_demo')
    PAYMENT_KEY_SECRET = os.getenv('PAYMENT_KEY_SECRET', '')
    PAYMENT_DEMO_LATENCY = float(os.getenv('PAYMENT_DEMO_LATENCY', '0'))


class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)


class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = 'pawhome-testing-secret-key-0123456789'
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    PAYMENT_DEMO_MODE = True
    PAYMENT_KEY_ID = 'rzp_test_demo'
    PAYMENT_KEY_SECRET = 'testing-payment-secret'
    PAYMENT_DEMO_LATENCY = 0.0


class ProductionConfig(Config):
    DEBUG = False


# FLASK_ENV 값에 따라 create_app에서 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
