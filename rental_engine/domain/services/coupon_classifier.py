"""
Clasificación de mensajes de rechazo de cupones.

El servidor responde con claves de mensaje ("coupons.expired") o con texto
ya traducido (en/ro/ru). Aquí sólo se decide el *tipo* de error; el texto
visible lo pone el colaborador de localización.
"""

from collections.abc import Mapping, Sequence

from rental_engine.domain.errors import CouponErrorKind

# Orden de evaluación: el primero que coincide gana. "used" va antes que
# "phone" porque "coupons.already_used_with_phone" es un cupón ya usado.
DEFAULT_KEYWORDS: Mapping[CouponErrorKind, Sequence[str]] = {
    CouponErrorKind.USED: (
        "already_used",
        "already used",
        "has been used",
        "was used",
        "deja utilizat",
        "deja folosit",
        "уже использован",
    ),
    CouponErrorKind.LIMIT_REACHED: (
        "limit",
        "лимит",
        "exhausted",
        "no redemptions left",
    ),
    CouponErrorKind.EXPIRED: (
        "expired",
        "expirat",
        "истек",
        "истёк",
        "просрочен",
    ),
    CouponErrorKind.PHONE_NOT_AUTHORIZED: (
        "phone_not_authorized",
        "not_available_for_phone",
        "phone",
        "telefon",
        "телефон",
    ),
    CouponErrorKind.INVALID: (
        "invalid",
        "not found",
        "does not exist",
        "invalid_code",
        "nevalid",
        "недействител",
        "неверн",
        "не найден",
    ),
}


def classify_coupon_message(
    message: str | None,
    keywords: Mapping[CouponErrorKind, Sequence[str]] = DEFAULT_KEYWORDS,
) -> CouponErrorKind:
    """
    Clasifica un mensaje del servidor en un CouponErrorKind.

    Args:
        message: Mensaje o clave de mensaje del servidor.
        keywords: Tabla tipo -> frases clave (insensible a mayúsculas).

    Returns:
        El tipo de error; GENERIC si nada coincide o no hay mensaje.
    """
    if not message:
        return CouponErrorKind.GENERIC

    text = message.casefold()
    for kind, phrases in keywords.items():
        if any(phrase.casefold() in text for phrase in phrases):
            return kind
    return CouponErrorKind.GENERIC
