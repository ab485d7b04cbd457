from sqlmodel import SQLModel

# Import des modèles pour qu'ils soient enregistrés auprès de SQLModel
from app.models.todo import Todo  # noqa: F401
from app.models.dependency import TodoDependency  # noqa: F401

Base = SQLModel
