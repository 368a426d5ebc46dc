# Utils package for Bazaar backend
