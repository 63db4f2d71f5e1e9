from models.token import CachedToken
