import time


class COSCredentials(object):
    """
    The COSCredentials object encapsulates the signing identity used for both request signers.

    Keyword arguments:
    secret_id -- the secret ID sent with every request as the access key id (default None)
    secret_key -- the secret key used as HMAC key material (default None)
    token -- the session token of temporary credentials obtained through STS (default None)
    expire_at -- the Unix time in seconds at which temporary credentials expire (default None, means never)
    expiration -- the expiration date string returned by STS, kept verbatim (default None)
    """

    def __init__(self, secret_id=None, secret_key=None, token=None, expire_at=None, expiration=None):
        self._secret_id = secret_id
        self._secret_key = secret_key
        self._token = token
        self._expire_at = int(expire_at) if expire_at is not None else None
        self._expiration = expiration

    @property
    def secret_id(self):
        return self._secret_id

    @property
    def secret_key(self):
        return self._secret_key

    @property
    def token(self):
        return self._token

    @property
    def expire_at(self):
        return self._expire_at

    @property
    def expiration(self):
        return self._expiration

    def is_expired(self, now=None):
        """ True if temporary credentials have expired """
        if self._expire_at is None:
            return False
        if now is None:
            now = time.time()
        return self._expire_at < now

    def to_dict(self):
        """ Renders temporary credentials with the names front-end SDKs expect """
        result = {
            "TmpSecretId": self._secret_id,
            "TmpSecretKey": self._secret_key,
            "Token": self._token,
        }
        if self._expire_at is not None:
            result["ExpiredTime"] = self._expire_at
        if self._expiration:
            result["Expiration"] = self._expiration
        return result

    def __repr__(self):
        return "COSCredentials(secret_id=%r, token=%s, expire_at=%r)" % (
            self._secret_id, "set" if self._token else None, self._expire_at)
