from unittest.mock import MagicMock

from alert_card.gfx_tools.text_layout import layout_lines, wrap_text


def measure(text):
    return len(text) * 10


class TestLayoutLines:
    def test_greedy_wrap(self):
        assert layout_lines('aaa bbb ccc', 80, measure) == ['aaa bbb', 'ccc']

    def test_long_word_overflows_instead_of_splitting(self):
        assert layout_lines('supercalifragilistic a', 50, measure) == ['supercalifragilistic', 'a']

    def test_lines_fit_unless_single_word(self):
        text = ('A severe thunderstorm capable of producing a tornado was located near Jeffersonville '
                'moving east at 40 mph. Extraordinarilylongwordthatneverfits here and there.')
        for max_width in (60, 90, 150, 230, 400):
            for line in layout_lines(text, max_width, measure):
                assert measure(line) <= max_width or len(line.split()) == 1

    def test_empty_text_gives_one_empty_line(self):
        assert layout_lines('', 100, measure) == ['']
        assert layout_lines('   \n ', 100, measure) == ['']

    def test_newlines_are_word_breaks(self):
        assert layout_lines('one\ntwo', 200, measure) == ['one two']

    def test_max_lines_truncates_with_ellipsis(self):
        assert layout_lines('one two three four five six', 80, measure, max_lines=2) == ['one two', 'three ...']

    def test_max_lines_shortens_last_line_to_fit(self):
        lines = layout_lines('aa bb cc dd ee ff gg hh', 80, measure, max_lines=1)
        assert lines == ['aa ...']
        assert measure(lines[0]) <= 80

    def test_max_lines_drops_ellipsis_when_lone_word_has_no_room(self):
        lines = layout_lines('aaaaaaaa bbbb cccc', 80, measure, max_lines=1)
        assert lines == ['aaaaaaaa']
        assert measure(lines[0]) <= 80


class TestWrapText:
    def make_draw(self):
        draw = MagicMock()
        draw.textlength.side_effect = lambda s, font=None: measure(s)
        return draw

    def test_draws_each_line_and_returns_last_baseline(self):
        draw = self.make_draw()
        last = wrap_text(draw, 'aaa bbb ccc', 5, 100, 80, 20, font=None)
        assert last == 120
        assert [c.args for c in draw.text.call_args_list] == [((5, 100), 'aaa bbb'), ((5, 120), 'ccc')]

    def test_center_alignment_uses_middle_anchor(self):
        draw = self.make_draw()
        wrap_text(draw, 'hello', 275, 585, 300, 16, font=None, align='center')
        assert draw.text.call_args.kwargs['anchor'] == 'ms'

    def test_no_state_between_calls(self):
        draw = self.make_draw()
        first = wrap_text(draw, 'aaa bbb ccc', 0, 0, 80, 20, font=None)
        second = wrap_text(draw, 'aaa bbb ccc', 0, 0, 80, 20, font=None)
        assert first == second == 20
