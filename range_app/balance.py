TENSION_SCORES = {"high": 1.0, "medium": 0.66, "low": 0.33}


def range_balance_data(pairs: list, range_: str) -> list:
    """
    Highest logged tension per movement function for one range class,
    as [{"subject": function, "A": score}, ...].
    """
    functions = []
    for pair in pairs:
        for variant in pair["exercises"]:
            if variant["function"] not in functions:
                functions.append(variant["function"])

    data = []
    for func in functions:
        scores = [
            TENSION_SCORES.get(entry["tension"], 0.0)
            for pair in pairs
            if any(v["function"] == func and v["range"] == range_ for v in pair["exercises"])
            for entry in pair["progress"]
        ]
        data.append({"subject": func, "A": max(scores, default=0.0)})
    return data
