from .quizzes import router as quizzes
from .quiz_result import router as quiz_result
