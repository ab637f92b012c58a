# Repository implementations of the domain data store interfaces
