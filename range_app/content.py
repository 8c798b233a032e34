WELCOME = {
    "title": "Welcome To The Journey",
    "paragraphs": [
        "Range Balance is a daily to-do list for the joints. Every movement a joint can make "
        "gets two exercise pairs: one worked through a short range and one through a long range.",
        "Tick a pair off when you have done it. It moves to the rest section and comes back on its own "
        "once it has rested: 24 hours for short range work, 48 hours for long range work.",
        "Log the reps, sets, weight and tension you used so the balance chart can show which "
        "movements are getting attention and which are being left behind.",
    ],
}

DEFINITIONS = {
    "short-range": {
        "title": "Short Range",
        "paragraphs": [
            "Short range work keeps the joint inside a limited part of its available motion, "
            "usually the middle or the end you are already strong in.",
            "It recovers quickly, so short range pairs reappear after 24 hours.",
        ],
    },
    "long-range": {
        "title": "Long Range",
        "paragraphs": [
            "Long range work takes the joint through as much of its motion as it can control, "
            "including the lengthened positions where tissue is under the most strain.",
            "It needs more recovery, so long range pairs reappear after 48 hours.",
        ],
    },
    "understanding-tension": {
        "title": "Understanding Tension",
        "paragraphs": [
            "Tension is how hard the working muscles felt during a set, independent of the load on the bar.",
            "The same weight can feel light in one range and heavy in another. Recording tension "
            "lets you compare effort across ranges and exercises.",
        ],
    },
    "tension-levels": {
        "title": "Tension Levels",
        "paragraphs": [
            "Low: the movement is easy to control and you could keep going for a long time.",
            "Medium: the last few reps take focus but your position does not change.",
            "High: you are close to losing the position and could only manage a rep or two more.",
        ],
    },
    "the-range-scale": {
        "title": "The Range Scale",
        "paragraphs": [
            "Think of a joint's motion as a scale from fully shortened to fully lengthened.",
            "Short range exercises live on one part of the scale, long range exercises cover the whole "
            "of it. A balanced week touches both ends for every movement.",
        ],
    },
}

THEORY = {
    "understanding-range-training": {
        "title": "Understanding Range Training",
        "paragraphs": [
            "Strength is specific to the range it is trained in. A muscle that is only ever loaded "
            "in its middle range stays weak at the ends.",
            "Range training deliberately loads each movement at both short and long lengths.",
        ],
    },
    "range-balance": {
        "title": "Range Balance",
        "paragraphs": [
            "Balance means no movement of a joint is neglected: flexion and extension, abduction and "
            "adduction, the rotations, each in both ranges.",
            "The balance chart on every region page shows the highest tension you have logged for each "
            "movement, split into short and long range.",
        ],
    },
    "how-to-get-good-adaptation": {
        "title": "Adaptation Mastery",
        "paragraphs": [
            "Adaptation comes from repeated, recoverable stress. Doing an exercise again before it "
            "has rested adds fatigue without adding much stimulus.",
            "Let the rest window run out, then return to the exercise and nudge tension, reps or "
            "weight up a little.",
        ],
    },
}

SECTIONS = {
    "definitions": DEFINITIONS,
    "theory": THEORY,
}

NAV_GROUPS = [
    ("Definitions", "definitions", ["short-range", "long-range", "understanding-tension", "tension-levels", "the-range-scale"]),
    ("Newsletters", "theory", ["understanding-range-training", "range-balance", "how-to-get-good-adaptation"]),
]


def get_page(section: str, page: str):
    return SECTIONS.get(section, {}).get(page)
