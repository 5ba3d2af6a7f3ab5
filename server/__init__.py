"""HTTP front ends for Off-By-One Solitaire."""
