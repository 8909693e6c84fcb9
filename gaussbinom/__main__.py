from gaussbinom.run import main

main()
