"""Planning data model: environment, trees and the planner base class."""
