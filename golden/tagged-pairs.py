def tagged_pairs_clauses():
    return [
        case(seq("point", bind("x"), bind("y")), then=lambda x, y: x + y),
        case(seq("scale", bind("k"), seq(bind("x"), bind("y"))), then=lambda k, x, y: [k * x, k * y]),
        case(seq("neg", bind("x")), when=lambda x: isinstance(x, int), then=lambda x: -x),
    ]
