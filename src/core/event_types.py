"""이벤트 유형 상수

GameService 가 발행하고 ProfileService 등이 구독한다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # shop
    ITEM_PURCHASED = "item_purchased"
    ITEM_SOLD = "item_sold"
    ITEM_BROKEN = "item_broken"

    # battle / round
    BATTLE_COMPLETED = "battle_completed"
    LIFE_LOST = "life_lost"
    ROUND_ENDED = "round_ended"

    # game
    GAME_OVER = "game_over"
