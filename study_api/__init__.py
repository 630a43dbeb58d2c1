"""Study assistant API: subjects, flashcards and spaced-repetition reviews."""
