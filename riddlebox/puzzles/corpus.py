# riddlebox/puzzles/corpus.py
# Built-in curated fallback puzzles, grouped by theme.

CURATED_PUZZLES: list[dict] = [
    # ---------------------------- riddles ----------------------------
    {"type": "riddle", "theme": "animal", "question": "I have a mane but I am not a horse, and they call me the king of the jungle. What am I?",
     "hint": "Think about big cats", "answer": "lion",
     "explanation": "A lion has a mane and is often called the king of the jungle."},
    {"type": "riddle", "theme": "animal", "question": "I carry my house on my back and I never hurry. What am I?",
     "hint": "It leaves a slimy trail", "answer": "snail",
     "explanation": "A snail carries its shell, its home, on its back and moves very slowly."},
    {"type": "riddle", "theme": "animal", "question": "I wear black and white stripes and graze on the savanna. What am I?",
     "hint": "It looks like a striped horse", "answer": "zebra",
     "explanation": "A zebra is a horse-like animal covered in black and white stripes."},
    {"type": "riddle", "theme": "animal", "question": "I sleep upside down all day and fly around at night. What am I?",
     "hint": "It is not a bird", "answer": "bat",
     "explanation": "Bats roost hanging upside down during the day and hunt at night."},

    {"type": "riddle", "theme": "object", "question": "What has a head and a tail but no body?",
     "hint": "Think about money", "answer": "coin",
     "explanation": "A coin has a head (the front with a face) and a tail (the back side) but no actual body."},
    {"type": "riddle", "theme": "object", "question": "What has hands but can't clap?",
     "hint": "It hangs on a wall", "answer": "clock",
     "explanation": "A clock has hands that point to the time, but they cannot clap."},
    {"type": "riddle", "theme": "object", "question": "What has one eye but can't see?",
     "hint": "Think about sewing", "answer": "needle",
     "explanation": "A needle has an eye that the thread goes through, but it cannot see."},
    {"type": "riddle", "theme": "object", "question": "What has words but never speaks?",
     "hint": "You find it in a library", "answer": "book",
     "explanation": "A book is full of words, yet it never says anything out loud."},

    {"type": "riddle", "theme": "nature", "question": "What can fill a room but takes up no space?",
     "hint": "Flip a switch", "answer": "light",
     "explanation": "Light fills a whole room without occupying any space."},
    {"type": "riddle", "theme": "nature", "question": "The more you take, the more you leave behind. What are they?",
     "hint": "Think about walking", "answer": "footsteps",
     "explanation": "Every step you take leaves another footstep behind you."},
    {"type": "riddle", "theme": "nature", "question": "I run but never get tired, and I have a bed but never sleep. What am I?",
     "hint": "It flows to the sea", "answer": "river",
     "explanation": "A river runs constantly and has a riverbed, but it never sleeps."},
    {"type": "riddle", "theme": "nature", "question": "What has roots nobody sees and is taller than the trees?",
     "hint": "People climb it", "answer": "mountain",
     "explanation": "A mountain rises above the trees and its roots are hidden deep in the ground."},

    {"type": "riddle", "theme": "food", "question": "What has to be broken before you can use it?",
     "hint": "Think about breakfast", "answer": "egg",
     "explanation": "You have to crack an egg open before you can cook with it."},
    {"type": "riddle", "theme": "food", "question": "I am yellow and curved, and monkeys love me. What am I?",
     "hint": "You peel me", "answer": "banana",
     "explanation": "A banana is a curved yellow fruit that monkeys famously enjoy."},
    {"type": "riddle", "theme": "food", "question": "What has many ears but cannot hear?",
     "hint": "It grows in a field", "answer": "corn",
     "explanation": "Corn grows in ears, but those ears cannot hear anything."},
    {"type": "riddle", "theme": "food", "question": "I have many layers and I can make you cry when you cut me. What am I?",
     "hint": "It is a vegetable", "answer": "onion",
     "explanation": "Cutting an onion releases a gas that makes your eyes water."},

    {"type": "riddle", "theme": "household", "question": "What gets wet while drying?",
     "hint": "Think about bathroom items", "answer": "towel",
     "explanation": "A towel gets wet as it dries you off."},
    {"type": "riddle", "theme": "household", "question": "What has teeth but can't bite?",
     "hint": "Think about tools", "answer": "comb",
     "explanation": "A comb has teeth but it cannot bite."},
    {"type": "riddle", "theme": "household", "question": "I'm tall when I'm young and short when I'm old. What am I?",
     "hint": "Think about something that burns", "answer": "candle",
     "explanation": "A candle is tall when new, but melts and becomes shorter as it burns."},
    {"type": "riddle", "theme": "household", "question": "What has a neck but no head?",
     "hint": "You pour from it", "answer": "bottle",
     "explanation": "A bottle has a narrow neck at the top but no head."},

    {"type": "riddle", "theme": "music", "question": "What has keys but can't open locks?",
     "hint": "Think about musical instruments", "answer": "piano",
     "explanation": "A piano has keys (piano keys) but they are musical keys, not keys that open locks."},
    {"type": "riddle", "theme": "music", "question": "I have strings but I am not a puppet, and you strum me to play a song. What am I?",
     "hint": "Rock bands love it", "answer": "guitar",
     "explanation": "A guitar has strings that you strum or pluck to make music."},
    {"type": "riddle", "theme": "music", "question": "You hit me to keep the beat, but I never get hurt. What am I?",
     "hint": "It sits at the back of the band", "answer": "drum",
     "explanation": "A drum is struck to keep the rhythm and is built to take the hits."},
    {"type": "riddle", "theme": "music", "question": "I have a bell but never ring, and you blow into me to play. What am I?",
     "hint": "It is made of brass", "answer": "trumpet",
     "explanation": "A trumpet ends in a flared bell and is played by blowing into the mouthpiece."},

    # ----------------------------- logic -----------------------------
    {"type": "logic", "theme": "ordering",
     "question": "There are two ducks in front of a duck, two ducks behind a duck and a duck in the middle. How many ducks are there?",
     "options": "A) 2 B) 3 C) 4 D) 5", "answer": "B", "hint": "Draw it or visualize the ducks in a line.",
     "explanation": "Three ducks in a line: the first two are in front of the last, the last two are behind the first, and one is in the middle."},
    {"type": "logic", "theme": "ordering",
     "question": "Five people were eating apples: A finished before B, but behind C. D finished before E, but behind B. What was the finishing order?",
     "options": "A) ABCDE B) CABDE C) CBADE D) CDABE", "answer": "B", "hint": "Start with C first, then A before B.",
     "explanation": "C finished first, then A, then B. D finished before E but after B, so the order is C, A, B, D, E."},
    {"type": "logic", "theme": "ordering",
     "question": "Tom is taller than Sam, and Sam is taller than Lee. Who is the shortest?",
     "options": "A) Tom B) Sam C) Lee D) Cannot tell", "answer": "C", "hint": "Line them up from tallest to shortest.",
     "explanation": "Tom is above Sam and Sam is above Lee, so Lee is the shortest."},

    {"type": "logic", "theme": "family",
     "question": "A girl has as many brothers as sisters, but each brother has only half as many brothers as sisters. How many children are in the family?",
     "options": "A) 5 B) 6 C) 7 D) 8", "answer": "C", "hint": "Count the girl herself when you count sisters.",
     "explanation": "Four girls and three boys work: each girl sees three brothers and three sisters, each boy sees two brothers and four sisters."},
    {"type": "logic", "theme": "family",
     "question": "Mary's father has five daughters: Nana, Nene, Nini and Nono. What is the fifth daughter's name?",
     "options": "A) Nunu B) Mary C) Nina D) Nona", "answer": "B", "hint": "Read the first word again.",
     "explanation": "The father is Mary's father, so Mary is the fifth daughter."},
    {"type": "logic", "theme": "family",
     "question": "Ann is Bob's sister and Bob is Carl's father. What is Ann to Carl?",
     "options": "A) Mother B) Sister C) Aunt D) Cousin", "answer": "C", "hint": "She is the sister of a parent.",
     "explanation": "The sister of Carl's father is Carl's aunt."},

    {"type": "logic", "theme": "patterns",
     "question": "What comes after △ □ ○ △ □ in this repeating sequence?",
     "options": "A) △ B) □ C) ○ D) ☆", "answer": "C", "hint": "Look at the pattern: it repeats three shapes.",
     "explanation": "The pattern repeats triangle, square, circle. After △ □ comes ○."},
    {"type": "logic", "theme": "patterns",
     "question": "If all roses are flowers and all flowers fade, do all roses fade?",
     "options": "A) Yes B) No", "answer": "A", "hint": "Follow the logical chain carefully.",
     "explanation": "Roses are a subset of flowers, and every flower fades, so every rose fades too."},
    {"type": "logic", "theme": "patterns",
     "question": "Which word does not belong with the others: apple, banana, carrot, cherry?",
     "options": "A) apple B) banana C) carrot D) cherry", "answer": "C", "hint": "Think about how each one grows.",
     "explanation": "Apple, banana and cherry are fruits; carrot is a vegetable."},

    {"type": "logic", "theme": "deduction",
     "question": "Anna, Ben and Cara each own one pet: a cat, a dog or a fish. Anna is allergic to fur and Ben walks his pet every day. Who owns the cat?",
     "options": "A) Anna B) Ben C) Cara", "answer": "C", "hint": "Assign the fish first.",
     "explanation": "Anna cannot own a furry pet so she has the fish, Ben walks the dog, which leaves the cat for Cara."},
    {"type": "logic", "theme": "deduction",
     "question": "Three boxes are labelled apples, oranges and mixed, and every label is wrong. An apple comes out of the box labelled mixed. What is in the box labelled oranges?",
     "options": "A) Apples B) Oranges C) Mixed", "answer": "C", "hint": "The mixed label is wrong, so that box holds one fruit only.",
     "explanation": "The box labelled mixed holds apples. The box labelled oranges cannot hold oranges, so it holds the mixed fruit."},
    {"type": "logic", "theme": "deduction",
     "question": "Jo scored more than Kim on a quiz, and Lu scored less than Kim. Who scored the highest?",
     "options": "A) Jo B) Kim C) Lu", "answer": "A", "hint": "Place Kim in the middle.",
     "explanation": "Jo is above Kim and Kim is above Lu, so Jo has the highest score."},
]
