ELLIPSIS = '...'


def layout_lines(text, max_width, measure, max_lines=None):
    """Greedy word wrap.

    Words get added to the current line until the line (with the next word) would be wider
    than max_width, then the line is flushed. A line always gets at least one word, so a
    single word wider than max_width overflows instead of being split.

    Args:
        text (str): text to wrap, any whitespace (newlines included) separates words
        max_width (float): max line width in px
        measure (callable): str -> width in px for the current font
        max_lines (int, optional): cap on the number of lines. Extra lines are dropped and the
            last kept line is shortened to end with '...'

    Returns:
        list of str: the wrapped lines, always at least one (possibly empty)
    """
    lines = []
    line = ''
    for word in text.split():
        test_line = line + word + ' '
        if line and measure(test_line) > max_width:
            lines.append(line.rstrip())
            line = word + ' '
        else:
            line = test_line
    lines.append(line.rstrip()) #last line always goes out, even if it's empty

    if max_lines is not None and len(lines) > max_lines:
        lines = lines[:max_lines]
        words = lines[-1].split()
        while len(words) > 1 and measure(' '.join(words) + ' ' + ELLIPSIS) > max_width:
            words.pop()
        if len(words) == 1 and measure(words[0] + ' ' + ELLIPSIS) > max_width:
            lines[-1] = words[0] #no room for the ellipsis next to a lone word
        else:
            lines[-1] = ' '.join(words + [ELLIPSIS])
    return lines


def wrap_text(draw, text, x, y, max_width, line_height, font, fill='#ffffff', align='left', max_lines=None):
    """Wraps and draws text onto a PIL ImageDraw, one baseline every line_height px.

    Args:
        draw (ImageDraw.ImageDraw): surface to draw on
        x (float): left edge, or the center line when align='center'
        y (float): baseline of the first line

    Returns:
        float: baseline y of the last line drawn, so the caller can keep laying out below it
    """
    lines = layout_lines(text, max_width, text_measurer(draw, font), max_lines=max_lines)
    return draw_lines(draw, lines, x, y, line_height, font, fill=fill, align=align)


def text_measurer(draw, font):
    return lambda s: draw.textlength(s, font=font)


def draw_lines(draw, lines, x, y, line_height, font, fill='#ffffff', align='left'):
    """Draws already wrapped lines. Returns the baseline y of the last one."""
    anchor = 'ms' if align == 'center' else 'ls'
    for line in lines:
        draw.text((x, y), line, font=font, fill=fill, anchor=anchor)
        y += line_height
    return y - line_height
