import secrets
import string

VIDEO_ID_PREFIX = "v_"
VIDEO_ID_LENGTH = 8
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def new_video_id() -> str:
    """Gera "v_" + 8 caracteres alfanuméricos.

    secrets.choice usa rejection sampling (randbelow), então não há viés de módulo.
    A unicidade contra o banco fica a cargo do repositório.
    """
    return VIDEO_ID_PREFIX + "".join(secrets.choice(ALPHABET) for _ in range(VIDEO_ID_LENGTH))
