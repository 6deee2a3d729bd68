"""
Singleton dependencies for resource management.
Services bind their collections once instead of on every API request.
"""
from typing import Optional, TYPE_CHECKING

# Avoid circular imports
if TYPE_CHECKING:
    from quizdesk.services.Auth import AuthService
    from quizdesk.services.Dashboard import DashboardService
    from quizdesk.services.Intake import IntakeService
    from quizdesk.services.Leaderboard import LeaderboardService
    from quizdesk.services.Questions import QuestionService
    from quizdesk.services.QuizFlow import QuizFlowService

_auth_service: Optional['AuthService'] = None
_dashboard_service: Optional['DashboardService'] = None
_intake_service: Optional['IntakeService'] = None
_leaderboard_service: Optional['LeaderboardService'] = None
_question_service: Optional['QuestionService'] = None
_quiz_flow_service: Optional['QuizFlowService'] = None


def get_auth_service():
    """Get singleton AuthService instance"""
    global _auth_service
    if _auth_service is None:
        from quizdesk.services.Auth import AuthService
        _auth_service = AuthService()
    return _auth_service


def get_dashboard_service():
    """Get singleton DashboardService instance"""
    global _dashboard_service
    if _dashboard_service is None:
        from quizdesk.services.Dashboard import DashboardService
        _dashboard_service = DashboardService()
    return _dashboard_service


def get_intake_service():
    """Get singleton IntakeService instance"""
    global _intake_service
    if _intake_service is None:
        from quizdesk.services.Intake import IntakeService
        _intake_service = IntakeService()
    return _intake_service


def get_leaderboard_service():
    """Get singleton LeaderboardService instance"""
    global _leaderboard_service
    if _leaderboard_service is None:
        from quizdesk.services.Leaderboard import LeaderboardService
        _leaderboard_service = LeaderboardService()
    return _leaderboard_service


def get_question_service():
    """Get singleton QuestionService instance"""
    global _question_service
    if _question_service is None:
        from quizdesk.services.Questions import QuestionService
        _question_service = QuestionService()
    return _question_service


def get_quiz_flow_service():
    """Get singleton QuizFlowService instance"""
    global _quiz_flow_service
    if _quiz_flow_service is None:
        from quizdesk.services.QuizFlow import QuizFlowService
        _quiz_flow_service = QuizFlowService()
    return _quiz_flow_service


def cleanup_resources():
    """
    Reset all singletons. Call this on application shutdown.
    """
    global _auth_service, _dashboard_service, _intake_service
    global _leaderboard_service, _question_service, _quiz_flow_service

    _auth_service = None
    _dashboard_service = None
    _intake_service = None
    _leaderboard_service = None
    _question_service = None
    _quiz_flow_service = None
