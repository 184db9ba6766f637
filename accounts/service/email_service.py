from email.message import EmailMessage

import aiosmtplib

from core.config import settings
from core.exceptions import EmailDeliveryFailure
from core.logger import get_logger

logger = get_logger("email")


def build_activation_message(email: str, token: str) -> EmailMessage:
    """활성화 메일 본문 (텍스트 + HTML)"""
    link = f"{settings.activation_url}{token}"

    message = EmailMessage()
    message["From"] = settings.email_from
    message["To"] = email
    message["Subject"] = "Account Activation"
    message.set_content(
        f"Please click the link below to activate your account.\n\n"
        f"{link}\n\n"
        f"Token is {token}\n"
    )
    message.add_alternative(
        f"<div><b>Please click below link to activate your account</b></div>"
        f"<div><a href=\"{link}\">Activate</a></div>"
        f"<div>Token is {token}</div>",
        subtype="html",
    )
    return message


async def send_account_activation(email: str, token: str) -> None:
    """
    활성화 메일 발송

    전송 계층 에러의 종류와 무관하게 EmailDeliveryFailure 하나로 변환합니다.
    """
    message = build_activation_message(email, token)
    try:
        await aiosmtplib.send(
            message,
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username or None,
            password=settings.smtp_password or None,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error(
            "활성화 메일 발송 실패",
            extra={"extra_data": {"error": str(e), "error_type": type(e).__name__}},
        )
        raise EmailDeliveryFailure() from e

    logger.info("활성화 메일 발송 완료")
