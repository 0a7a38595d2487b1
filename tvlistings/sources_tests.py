from tvlistings.sources import lines_from_html, lines_from_text, text_from_html


def test_lines_from_text_trims_and_drops_empty_lines():
    lines = lines_from_text('  Friday, 5th December \n\n\t\nHull City v Middlesbrough\r\n')

    assert [line.text for line in lines] == [
        'Friday, 5th December',
        'Hull City v Middlesbrough',
    ]
    assert [line.index for line in lines] == [0, 1]


def test_lines_from_text_empty():
    assert lines_from_text('') == []
    assert lines_from_text(None) == []


def test_lines_from_html_walks_leaf_elements_in_order():
    html = (
        '<html><head><title>Listings</title></head><body>'
        '<h2>Friday, 5th December</h2>'
        '<div class="fixture"><span>Hull City v Middlesbrough</span>'
        '<span>ST:  15:00</span></div>'
        '<script>var x = 1;</script>'
        '<div><span>   </span></div>'
        '</body></html>'
    )

    assert [line.text for line in lines_from_html(html)] == [
        'Friday, 5th December',
        'Hull City v Middlesbrough',
        'ST: 15:00',
    ]


def test_lines_from_html_skips_non_leaf_text():
    html = '<body><div>Hull City v Middlesbrough<br>ST: 15:00</div></body>'

    assert lines_from_html(html) == []


def test_text_from_html():
    html = '<body><div>Hull City v Middlesbrough<br>ST: 15:00</div><style>p {}</style></body>'

    assert [line.text for line in lines_from_text(text_from_html(html))] == [
        'Hull City v Middlesbrough',
        'ST: 15:00',
    ]


def test_text_from_html_keeps_inline_elements_on_one_line():
    html = (
        '<body>\n'
        '  <h3>Friday, 5th December</h3>\n'
        '  <div>\n'
        '    <a href="/hull">Hull City</a> v <a href="/boro">Middlesbrough</a>\n'
        '  </div>\n'
        '  <div><span>ST:</span>\n    15:00</div>\n'
        '  <!-- advert -->\n'
        '  <p><b>Sky Sports</b> Red Button<br>TNT Sports 1</p>\n'
        '</body>'
    )

    assert [line.text for line in lines_from_text(text_from_html(html))] == [
        'Friday, 5th December',
        'Hull City v Middlesbrough',
        'ST: 15:00',
        'Sky Sports Red Button',
        'TNT Sports 1',
    ]
