from .photo_date_tagger import main

main()
