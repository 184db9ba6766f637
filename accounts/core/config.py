from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    # Database
    database_url: str
    database_echo: bool = False   # True면 실행되는 SQL을 콘솔에 출력 (개발용)

    # 비밀번호 해싱 비용 (테스트에서는 낮춰서 속도 확보)
    bcrypt_rounds: int = 12

    # 토큰 길이 (hex 문자 수)
    auth_token_length: int = 32
    activation_token_length: int = 16

    # 페이지네이션 — 클라이언트 요청과 무관하게 최대 10건
    page_size_default: int = 10
    page_size_max: int = 10

    # SMTP (계정 활성화 메일)
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = False
    smtp_timeout: float = 10.0
    email_from: str = "My App <info@my-app.com>"
    activation_url: str = "http://localhost:8080/#/activate/"

    # 로그 레벨 (DEBUG, INFO, WARNING ...)
    log_level: str = "INFO"

    # 다국어 메시지
    default_language: str = "en"
    locales_dir: Path = Path(__file__).parent.parent / "locales"

    # Pydantic v2 방식: Config 내부 클래스 대신 model_config 사용
    model_config = SettingsConfigDict(
        # config.py -> core -> accounts -> 프로젝트 루트 아래의 .env 찾기
        env_file=Path(__file__).parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,     # 환경변수 대소문자 무시
    )


# 싱글톤 인스턴스 — 앱 어디서든 import해서 사용
settings = Settings()
