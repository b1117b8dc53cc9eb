"""자동 진행 데모 (bootstrap + autoplay) 스모크 테스트"""

from sqlalchemy.orm import Session

from src.main import autoplay, bootstrap


class TestAutoplay:
    def test_full_game(self, db_session: Session):
        app = bootstrap(db_session)
        assert app.catalog.count() == 117

        won = autoplay(app, "normal", save=True)

        state = app.game_service.state
        assert state.is_over
        assert won == state.player_won_game
        assert app.profile_service.snapshot().games_played == 1
        assert not app.save_service.has_save()

    def test_locked_difficulty(self, db_session: Session):
        app = bootstrap(db_session)
        assert autoplay(app, "torment", 5) is False
        assert not app.game_service.has_game
