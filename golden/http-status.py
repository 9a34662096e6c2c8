def status_class_clauses():
    return [
        case(bind("code", rng(100, 199)), then=lambda code: "informational"),
        case(bind("code", rng(200, 299)), then=lambda code: "success"),
        case(bind("code", rng(300, 399)), then=lambda code: "redirect"),
        case(bind("code", rng(400, 499)), then=lambda code: "client error"),
        case(bind("code", rng(500, 599)), then=lambda code: "server error"),
        case(wildcard(), then=lambda: "unknown"),
    ]
