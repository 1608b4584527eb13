from bdecode.cursor import DecodeInput


def test_next_advances_a_copy():
    cursor = DecodeInput("i3e")
    ch, rest = cursor.next()
    assert ch == "i"
    assert rest.position == 1
    assert cursor.position == 0
    assert rest.data is cursor.data


def test_next_at_end():
    cursor = DecodeInput("e", 1)
    ch, rest = cursor.next()
    assert ch is None
    assert rest is cursor
    assert cursor.at_end


def test_peek_does_not_consume():
    cursor = DecodeInput("l4:spame", 1)
    assert cursor.peek() == "4"
    assert cursor.position == 1
    assert DecodeInput("").peek() is None


def test_take():
    cursor = DecodeInput("spam")
    content, rest = cursor.take(3)
    assert content == "spa"
    assert rest.position == 3
    assert rest.remaining == "m"


def test_take_past_end():
    cursor = DecodeInput("abc", 1)
    content, rest = cursor.take(5)
    assert content is None
    assert rest is cursor


def test_clone_shares_data():
    cursor = DecodeInput("4:spam", 2)
    clone = cursor.clone()
    assert clone == cursor
    assert clone.data is cursor.data


def test_str():
    assert str(DecodeInput("i3e", 1)) == "{position: 1, data: i3e}"
