import pytest

from direction import capability
from direction.extractor import DirectionExtractor
from direction.factory import get_direction_source
from direction.text_source import TextDirectionSource
from game.model import Direction


class TestExtractor:
    @pytest.mark.parametrize("text, expected", [
        ("north", Direction.NORTH),
        ("Go UP", Direction.NORTH),
        ("south", Direction.SOUTH),
        ("move down", Direction.SOUTH),
        ("EAST", Direction.EAST),
        ("to the right", Direction.EAST),
        ("west", Direction.WEST),
        ("Left", Direction.WEST),
    ])
    def test_keywords(self, text, expected):
        assert DirectionExtractor().extract_direction(text) == expected

    def test_first_keyword_wins(self):
        assert DirectionExtractor().extract_direction("left then up") == Direction.NORTH
        assert DirectionExtractor().extract_direction("right or down") == Direction.SOUTH

    @pytest.mark.parametrize("text", ["", None, "hello", "stop"])
    def test_no_direction(self, text):
        assert DirectionExtractor().extract_direction(text) is None


class TestTextSource:
    def make_source(self, stream=None):
        received = []
        source = TextDirectionSource(received.append, stream=stream)
        source.init()
        source.start()
        return source, received

    def test_one_direction_per_utterance(self):
        source, received = self.make_source()
        assert source.feed("le", is_final=False) is False
        assert source.feed("left", is_final=False) is True
        assert source.feed("left up", is_final=False) is False
        assert source.feed("left up", is_final=True) is False
        assert source.feed("down", is_final=True) is True
        assert received == [Direction.WEST, Direction.SOUTH]

    def test_stopped_source_delivers_nothing(self):
        source, received = self.make_source()
        source.stop()
        assert source.feed("up") is False
        assert received == []

    def test_run_reads_stream(self):
        source, received = self.make_source(stream=["up\n", "nothing\n", "left\n"])
        source.run()
        assert received == [Direction.NORTH, Direction.WEST]

    def test_run_stops_when_asked(self):
        source, received = self.make_source(stream=["up", "down", "left"])
        source.run(should_continue=lambda: len(received) < 2)
        assert received == [Direction.NORTH, Direction.SOUTH]


class TestFactory:
    def test_text_when_no_display(self, monkeypatch):
        monkeypatch.setattr(capability, "is_display_available", lambda: False)
        assert isinstance(get_direction_source(lambda direction: None), TextDirectionSource)

    def test_explicit_text(self):
        assert isinstance(get_direction_source(lambda direction: None, prefer="text"), TextDirectionSource)

    def test_unknown_source(self):
        with pytest.raises(ValueError):
            get_direction_source(lambda direction: None, prefer="telepathy")

    def test_dummy_video_driver_has_no_display(self, monkeypatch):
        monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
        assert not capability.is_display_available()


class TestKeyboardSource:
    def test_keys_map_to_directions(self):
        pygame = pytest.importorskip("pygame")
        from direction.keyboard_source import KeyboardDirectionSource

        received = []
        source = KeyboardDirectionSource(received.append)
        source.start()
        events = [
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT),
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w),
            pygame.event.Event(pygame.KEYDOWN, key=pygame.K_x),
        ]
        assert source.poll(events)
        assert received == [Direction.WEST, Direction.NORTH]

        assert not source.poll([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)])
        assert source.quit_requested
