import typing


def english_enumerate(items: typing.Iterable[str], conj: str = ", and ") -> str:
    """
    Joins ``items`` the way they are listed in an English sentence.

    >>> english_enumerate(["a", "b", "c"], conj=", or ")
    'a, b, or c'
    """
    buf = []

    i = iter(items)
    try:
        x = next(i)
    except StopIteration:
        return ""
    buf.append(x)

    lx: typing.Optional[str] = None

    for x in i:
        if lx is not None:
            buf.append(", ")
            buf.append(lx)
        lx = x
    if lx is not None:
        buf.append(conj if len(buf) > 1 else conj.lstrip(","))
        buf.append(lx)
    return "".join(buf)
