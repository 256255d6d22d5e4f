import random

MOTDS = (
    "Remember, the real Benchmark Buddy was the friends we made along the way.",
    "Life is more fun when you put things on top of your head.",
    "Why not Zoidberg?",
    "I used to think that orthopedic inserts were not for me, but I stand corrected.",
    "Anything is Turing-complete if you're patient enough!",
    "Knowledge weighs nothing; carry all you can!",
    "Sufficiently crude magic is indistinguishable from technology.",
    "What's the DEAL with linear time?",
    "Do you think William Shakespeare ever picked up a spear and shook it?",
    "Why are you the way that you are?",
    "Remember: whatever happens, at the end of the day, it's night.",
    "Somehow, Benchmark Buddy returned",
    "Give a man a fish, just because it is a nice thing to do.",
    "Meow meow meow meow",
    "A monad is just a monoid in the category of endofunctors!",
    "What if everything I believe is wrong?",
    "You must be more critical of that which you cherish than of that which you disdain.",
)


def pick_motd(rng: random.Random | None = None) -> str:
    return (rng or random.Random()).choice(MOTDS)


def greeting(rng: random.Random | None = None) -> str:
    return f"Welcome to Benchmark Buddy. {pick_motd(rng)}"
