#import modeli zeby SQLAlchemy zarejestrowal je w base metadata

from app.data.models.user import UserModel

__all__ = ["UserModel"]
