"""Guard Patrol - controle de rondes / GPS-verified guard patrol check-ins."""
