from block_grid.visualization.human_play import _Banner


def test_banner_shows_for_its_duration():
    banner = _Banner()
    assert not banner.visible(0)
    banner.show("Game over! Score: 30", now=1000, duration=500)
    assert banner.visible(1000)
    assert banner.visible(1499)
    assert not banner.visible(1500)
    assert banner.text == "Game over! Score: 30"
